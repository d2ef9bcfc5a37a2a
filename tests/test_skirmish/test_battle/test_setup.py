import pytest

from skirmish_engine.core.errors import ContentLookupError
from skirmish.components import CombatEncounter, CombatPhase, EncounterEnemy
from skirmish.battle.config import CombatConfig
from skirmish.battle.setup import (
    create_quick_combat,
    initialize_combat,
    quick_encounter,
    spawn_enemies,
)


def test_initialize_combat(combat_state):
    assert len(combat_state.combatants) == 3
    assert combat_state.turn_order[0] == "player"
    assert combat_state.turn_order == ("player", "test_bandit_0", "test_bandit_1")
    assert combat_state.phase is CombatPhase.INITIALIZING
    assert combat_state.round == 1
    assert combat_state.current_turn_index == 0
    assert combat_state.log == ()


def test_initialize_combat_metadata(combat_state):
    assert combat_state.id == "combat_test_encounter"
    assert combat_state.encounter_id == "test_encounter"
    assert combat_state.can_flee
    assert not combat_state.is_boss
    assert combat_state.max_log_entries == 50


def test_player_first_then_enemies_in_roster_order(combat_state):
    assert [c.id for c in combat_state.combatants] == ["player", "test_bandit_0", "test_bandit_1"]
    assert combat_state.player.name == "Hero"
    assert combat_state.player.weapon_id == "iron_sword"
    assert [c.name for c in combat_state.enemies] == ["Bandit", "Bandit B"]


def test_boss_flags_copied(boss_encounter, init_context, lookup):
    state = initialize_combat(boss_encounter, init_context, lookup)

    assert state.is_boss
    assert not state.can_flee


def test_log_cap_from_config(encounter, init_context, lookup):
    state = initialize_combat(encounter, init_context, lookup, CombatConfig(max_log_entries=5))
    assert state.max_log_entries == 5


def test_instance_numbering_continues_across_groups(lookup):
    encounter = CombatEncounter(
        id="mixed",
        name="Mixed Pack",
        enemies=[
            EncounterEnemy(enemy_id="test_bandit", count=1),
            EncounterEnemy(enemy_id="wolf", count=1),
            EncounterEnemy(enemy_id="test_bandit", count=2),
        ],
    )
    enemies = spawn_enemies(encounter, lookup)

    assert [e.id for e in enemies] == ["test_bandit_0", "wolf_0", "test_bandit_1", "test_bandit_2"]
    assert [e.name for e in enemies] == ["Bandit", "Wolf", "Bandit B", "Bandit C"]


def test_unknown_enemy_raises(init_context, lookup):
    encounter = CombatEncounter(
        id="haunted",
        name="Haunted Crypt",
        enemies=[EncounterEnemy(enemy_id="ghost", count=1)],
    )

    with pytest.raises(ContentLookupError) as exc_info:
        initialize_combat(encounter, init_context, lookup)

    assert exc_info.value.content_id == "ghost"
    assert "haunted" in str(exc_info.value)


def test_quick_combat(player_stats, bandit_definition, wolf_definition):
    state = create_quick_combat(player_stats, [(bandit_definition, 2), (wolf_definition, 1)])

    assert state.encounter_id == "quick_combat_test_bandit_wolf"
    assert state.phase is CombatPhase.INITIALIZING
    assert state.player.name == "Player"
    assert state.player.weapon_id is None
    assert [e.id for e in state.enemies] == ["test_bandit_0", "test_bandit_1", "wolf_0"]
    assert state.can_flee
    assert not state.is_boss


def test_quick_combat_without_fleeing(player_stats, bandit_definition):
    state = create_quick_combat(player_stats, [(bandit_definition, 1)], can_flee=False)

    assert not state.can_flee
    assert state.encounter_id == "quick_combat_test_bandit"


def test_quick_encounter_sums_rewards(bandit_definition, wolf_definition):
    encounter = quick_encounter([(bandit_definition, 2), (wolf_definition, 1)])

    assert encounter.name == "Quick Combat"
    assert encounter.tags == ("quick_combat",)
    assert encounter.rewards.xp == 52
    assert encounter.rewards.gold == 20
    assert encounter.rewards.items == ()
    assert quick_encounter([(bandit_definition, 2), (wolf_definition, 1)]) == encounter
