import pytest

from skirmish_engine.core.events import EventBus
from skirmish.components import (
    CombatEncounter,
    CombatInitContext,
    CombatStats,
    EncounterEnemy,
    EncounterRewards,
    EnemyDefinition,
    ItemDrop,
)
from skirmish.battle.setup import initialize_combat
from skirmish.battle.turn_order import begin_combat


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def bandit_definition():
    return EnemyDefinition(
        id="test_bandit",
        name="Bandit",
        max_health=30,
        action_points=4,
        base_damage=10,
        armor=5,
        evasion=10,
        xp_reward=20,
        gold_reward=10,
    )


@pytest.fixture
def wolf_definition():
    return EnemyDefinition(
        id="wolf",
        name="Wolf",
        max_health=20,
        action_points=8,
        base_damage=6,
        armor=1,
        accuracy_mod=10,
        evasion=20,
        xp_reward=12,
        gold_reward=0,
        behavior="aggressive",
    )


@pytest.fixture
def lookup(bandit_definition, wolf_definition):
    """Enemy lookup callable backed by a plain dict."""
    definitions = {d.id: d for d in (bandit_definition, wolf_definition)}
    return definitions.get


@pytest.fixture
def encounter():
    return CombatEncounter(
        id="test_encounter",
        name="Bandit Ambush",
        enemies=[EncounterEnemy(enemy_id="test_bandit", count=2)],
        rewards=EncounterRewards(
            xp=50,
            gold=20,
            items=[ItemDrop(item_id="health_potion", quantity=1, chance=1.0)],
        ),
    )


@pytest.fixture
def boss_encounter():
    return CombatEncounter(
        id="bandit_chief",
        name="The Bandit Chief",
        enemies=[EncounterEnemy(enemy_id="test_bandit", count=1)],
        is_boss=True,
        can_flee=False,
    )


@pytest.fixture
def player_stats():
    return CombatStats(
        hp=100,
        max_hp=100,
        attack=15,
        defense=8,
        speed=12,
        accuracy=80,
        evasion=15,
        crit_chance=10,
        crit_multiplier=1.5,
    )


@pytest.fixture
def init_context(player_stats):
    return CombatInitContext(
        player_stats=player_stats,
        player_name="Hero",
        player_weapon_id="iron_sword",
    )


@pytest.fixture
def combat_state(encounter, init_context, lookup):
    """Freshly initialized battle: Hero vs. two bandits, not yet begun."""
    return initialize_combat(encounter, init_context, lookup)


@pytest.fixture
def active_state(combat_state):
    """Battle on the player's first turn."""
    return begin_combat(combat_state)
