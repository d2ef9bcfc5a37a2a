import json

import pytest

from skirmish_engine.core.errors import ContentLookupError, ContentValidationError
from skirmish.components import CombatInitContext, CombatStats, EnemyBehavior
from skirmish.battle.content import ContentDatabase
from skirmish.battle.setup import initialize_combat

BANDIT = {
    "id": "test_bandit",
    "name": "Bandit",
    "max_health": 30,
    "action_points": 4,
    "base_damage": 10,
    "armor": 5,
    "evasion": 10,
    "xp_reward": 20,
    "gold_reward": 10,
    "behavior": "aggressive",
}

AMBUSH = {
    "id": "bandit_ambush",
    "name": "Bandit Ambush",
    "enemies": [{"enemy_id": "test_bandit", "count": 2}],
    "rewards": {
        "xp": 50,
        "gold": 20,
        "items": [{"item_id": "health_potion", "quantity": 1, "chance": 0.5}],
    },
}


@pytest.fixture
def data_path(tmp_path):
    for folder in ("enemies", "encounters"):
        (tmp_path / "database" / folder).mkdir(parents=True)
    return tmp_path


def write(data_path, folder, name, records):
    with open(data_path / "database" / folder / name, "w") as f:
        json.dump(records, f)


def test_load_bundled_schemas(data_path):
    write(data_path, "enemies", "bandits.json", [BANDIT])
    write(data_path, "encounters", "roads.json", [AMBUSH])

    content = ContentDatabase(data_path)
    content.load_all()

    bandit = content.get_enemy("test_bandit")
    assert bandit.max_health == 30
    assert bandit.behavior is EnemyBehavior.AGGRESSIVE

    ambush = content.get_encounter("bandit_ambush")
    assert ambush.enemies[0].count == 2
    assert ambush.rewards.items[0].chance == 0.5
    assert ambush.can_flee


def test_lookup_feeds_initialization(data_path):
    write(data_path, "enemies", "bandits.json", [BANDIT])
    write(data_path, "encounters", "roads.json", [AMBUSH])
    content = ContentDatabase(data_path)
    content.load_all()

    context = CombatInitContext(player_stats=CombatStats(speed=12), player_name="Hero")
    state = initialize_combat(content.require_encounter("bandit_ambush"), context, content.get_enemy)

    assert state.turn_order == ("player", "test_bandit_0", "test_bandit_1")


def test_schema_violation_skipped(data_path):
    broken = dict(BANDIT, id="broken_bandit", max_health=0)
    write(data_path, "enemies", "bandits.json", [BANDIT, broken])

    content = ContentDatabase(data_path)
    content.load_all()

    assert content.get_enemy("broken_bandit") is None
    assert content.get_enemy("test_bandit") is not None


def test_unknown_field_skipped(data_path):
    typo = dict(BANDIT, id="typo_bandit", max_healht=10)
    write(data_path, "enemies", "bandits.json", [typo])

    content = ContentDatabase(data_path)
    content.load_all()

    assert content.get_enemy("typo_bandit") is None


def test_strict_mode(data_path):
    write(data_path, "encounters", "empty.json", [{"id": "empty", "name": "Empty", "enemies": []}])

    content = ContentDatabase(data_path, strict=True)
    with pytest.raises(ContentValidationError):
        content.load_all()


def test_require_unknown_encounter(data_path):
    content = ContentDatabase(data_path)
    content.load_all()

    with pytest.raises(ContentLookupError):
        content.require_encounter("nowhere")


def test_dangling_enemy_reference_logged(data_path, caplog):
    write(data_path, "encounters", "roads.json", [AMBUSH])

    content = ContentDatabase(data_path)
    content.load_all()

    assert content.get_encounter("bandit_ambush") is not None
    assert "unknown enemy 'test_bandit'" in caplog.text
