import pytest

from skirmish_engine.core.errors import ContentLookupError
from skirmish.components import CombatantKind, EnemyBehavior
from skirmish.battle.config import CombatConfig
from skirmish.battle.factory import (
    PLAYER_ID,
    create_enemy_combatant,
    create_player_combatant,
    instance_letters,
    instance_name,
)


def test_create_player(player_stats):
    player = create_player_combatant("Hero", player_stats, "iron_sword")

    assert player.id == PLAYER_ID
    assert player.kind is CombatantKind.PLAYER
    assert player.stats == player_stats
    assert player.weapon_id == "iron_sword"
    assert player.status_effects == ()
    assert player.is_alive


def test_create_enemy_maps_definition(bandit_definition):
    bandit = create_enemy_combatant(bandit_definition, 0)

    assert bandit.id == "test_bandit_0"
    assert bandit.definition_id == "test_bandit"
    assert bandit.name == "Bandit"
    assert bandit.kind is CombatantKind.ENEMY
    assert bandit.stats.hp == 30
    assert bandit.stats.max_hp == 30
    assert bandit.stats.attack == 10
    assert bandit.stats.defense == 5
    assert bandit.stats.speed == 4
    assert bandit.stats.accuracy == 70
    assert bandit.stats.evasion == 10
    assert bandit.stats.crit_chance == 5
    assert bandit.stats.crit_multiplier == 1.5
    assert bandit.xp_reward == 20
    assert bandit.gold_reward == 10
    assert bandit.behavior is EnemyBehavior.AGGRESSIVE


def test_enemy_accuracy_modifier(wolf_definition):
    wolf = create_enemy_combatant(wolf_definition, 0)
    assert wolf.stats.accuracy == 80


def test_enemy_baselines_from_config(bandit_definition):
    config = CombatConfig(enemy_base_accuracy=60, enemy_crit_chance=0, enemy_crit_multiplier=2.0)
    bandit = create_enemy_combatant(bandit_definition, 0, config)

    assert bandit.stats.accuracy == 60
    assert bandit.stats.crit_chance == 0
    assert bandit.stats.crit_multiplier == 2.0


def test_instance_names(bandit_definition):
    assert create_enemy_combatant(bandit_definition, 1).name == "Bandit B"
    assert create_enemy_combatant(bandit_definition, 2).id == "test_bandit_2"
    assert create_enemy_combatant(bandit_definition, 2).name == "Bandit C"


@pytest.mark.parametrize("index, letters", [
    (0, "A"),
    (1, "B"),
    (25, "Z"),
    (26, "BA"),
    (27, "BB"),
])
def test_instance_letters(index, letters):
    assert instance_letters(index) == letters


def test_instance_letters_rejects_negative():
    with pytest.raises(ValueError):
        instance_letters(-1)


def test_instance_name_first_is_plain():
    assert instance_name("Slime", 0) == "Slime"
    assert instance_name("Slime", 26) == "Slime BA"


def test_missing_definition_raises():
    with pytest.raises(ContentLookupError):
        create_enemy_combatant(None, 0)
