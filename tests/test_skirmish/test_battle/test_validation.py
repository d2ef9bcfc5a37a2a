from skirmish.components import (
    ActionType,
    CombatAction,
    CombatPhase,
    StatusEffect,
    StatusEffectType,
)
from skirmish.battle.validation import get_valid_targets, is_action_valid

STUN = StatusEffect(type=StatusEffectType.STUNNED, turns_remaining=1)


def attack(target_id="test_bandit_0", actor_id="player"):
    return CombatAction(type=ActionType.ATTACK, actor_id=actor_id, target_id=target_id)


def test_valid_attack(active_state):
    result = is_action_valid(active_state, attack(), active_state.player)

    assert result.valid
    assert result.reason is None
    assert result


def test_dead_actor(active_state):
    dead = active_state.player.with_hp(0)
    result = is_action_valid(active_state, attack(), dead)

    assert not result
    assert result.reason == "Hero is dead and cannot act"


def test_stunned_actor(active_state):
    stunned = active_state.player.with_status_effects((STUN,))
    result = is_action_valid(active_state, attack(), stunned)

    assert not result.valid
    assert result.reason == "Hero is stunned and cannot act"


def test_dead_checked_before_stunned(active_state):
    actor = active_state.player.with_status_effects((STUN,)).with_hp(0)
    assert "dead" in is_action_valid(active_state, attack(), actor).reason


def test_attack_without_target(active_state):
    result = is_action_valid(active_state, attack(target_id=None), active_state.player)
    assert result.reason == "No target specified for attack"


def test_flee_in_boss_fight(active_state):
    state = active_state.evolve(can_flee=False, is_boss=True)
    action = CombatAction(type=ActionType.FLEE, actor_id="player")

    assert is_action_valid(state, action, state.player).reason == "Cannot flee from this battle"


def test_combat_over(active_state):
    state = active_state.evolve(phase=CombatPhase.VICTORY)
    result = is_action_valid(state, attack(), state.player)

    assert result.reason == "Combat is already over"


def test_missing_target_reported_before_combat_over(active_state):
    state = active_state.evolve(phase=CombatPhase.VICTORY)
    result = is_action_valid(state, attack(target_id=None), state.player)

    assert result.reason == "No target specified for attack"


def test_item_without_item_id(active_state):
    action = CombatAction(type=ActionType.ITEM, actor_id="player")
    result = is_action_valid(active_state, action, active_state.player)

    assert result.reason == "No item specified"


def test_defend_always_valid_for_living_actor(active_state):
    action = CombatAction(type=ActionType.DEFEND, actor_id="player")
    assert is_action_valid(active_state, action, active_state.player)


def test_player_targets_living_enemies(active_state):
    dead = active_state.get_combatant("test_bandit_0").with_hp(0)
    state = active_state.replace_combatant(dead)

    assert [c.id for c in get_valid_targets(state, "player")] == ["test_bandit_1"]


def test_enemy_targets_player(active_state):
    assert [c.id for c in get_valid_targets(active_state, "test_bandit_0")] == ["player"]


def test_unknown_actor_has_no_targets(active_state):
    assert get_valid_targets(active_state, "nobody") == ()
