"""
Battle actions - attack, defend, flee, item.

process_action() is a pure transition: it never mutates its input and,
given the same state, action and rolls, always returns the same outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

from skirmish_engine.core.rng import RollSource
from skirmish.components import (
    ActionResult,
    ActionType,
    Combatant,
    CombatAction,
    CombatPhase,
    CombatState,
    RandomRolls,
    StatusEffect,
    StatusEffectType,
)
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG
from skirmish.battle.damage import (
    calculate_damage,
    calculate_flee_chance,
    calculate_hit_chance,
    effective_stats,
    roll_critical,
    roll_hit,
)
from skirmish.battle.turn_order import prune_turn_order
from skirmish.battle.validation import get_valid_targets, is_action_valid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionOutcome:
    """New state plus the result describing what happened."""
    state: CombatState
    result: ActionResult

    def __iter__(self) -> Iterator[Union[CombatState, ActionResult]]:
        # Allows: state, result = process_action(...)
        yield self.state
        yield self.result


# Resolves an item action; the engine logs the returned result.
ItemHandler = Callable[[CombatState, CombatAction, Combatant], ActionOutcome]


def _failure(action: CombatAction, message: str) -> ActionResult:
    """Create a failed result."""
    return ActionResult(action=action, success=False, message=message)


def process_action(
    state: CombatState,
    action: CombatAction,
    rolls: Optional[RandomRolls] = None,
    *,
    rng: Optional[RollSource] = None,
    config: CombatConfig = DEFAULT_CONFIG,
    item_handler: Optional[ItemHandler] = None,
) -> ActionOutcome:
    """
    Validate and resolve one combat action.

    Args:
        state: Current battle state (left untouched)
        action: Action to resolve
        rolls: Pre-drawn rolls; missing ones come from ``rng``
        rng: Roll source for missing rolls (a fresh unseeded one if None)
        config: Tuning constants
        item_handler: Resolver for item actions

    Returns:
        ActionOutcome with the new state and the result. Rejected actions
        return the very same state object with a failed result.
    """
    actor = state.get_combatant(action.actor_id)
    if actor is None:
        return ActionOutcome(state, _failure(action, "Actor is not available"))

    validation = is_action_valid(state, action, actor)
    if not validation.valid:
        logger.debug(f"Rejected {action.type.value} by {actor.id}: {validation.reason}")
        return ActionOutcome(state, _failure(action, validation.reason))

    rolls = rolls or RandomRolls()
    source = rng if rng is not None else RollSource()

    if action.type is ActionType.ATTACK:
        return _process_attack(state, action, actor, rolls, source, config)
    elif action.type is ActionType.DEFEND:
        return _process_defend(state, action, actor, config)
    elif action.type is ActionType.FLEE:
        return _process_flee(state, action, actor, rolls, source, config)
    elif action.type is ActionType.ITEM:
        return _process_item(state, action, actor, item_handler)

    return ActionOutcome(state, _failure(action, f"Unknown action type: {action.type}"))


def _process_attack(
    state: CombatState,
    action: CombatAction,
    actor: Combatant,
    rolls: RandomRolls,
    source: RollSource,
    config: CombatConfig,
) -> ActionOutcome:
    """Resolve a basic attack: hit, critical, damage, death."""
    if not action.target_id:
        return ActionOutcome(state, _failure(action, "No target specified"))

    target = state.get_combatant(action.target_id)
    if target is None or not target.is_alive:
        return ActionOutcome(state, _failure(action, "Target is not available"))

    actor_stats = effective_stats(actor)
    target_stats = effective_stats(target)

    hit_chance = calculate_hit_chance(actor_stats.accuracy, target_stats.evasion, config)
    if not roll_hit(hit_chance, source.pick(rolls.hit_roll)):
        result = ActionResult(
            action=action,
            success=False,
            was_dodged=True,
            message=f"{actor.name} misses {target.name}!",
        )
        return ActionOutcome(state.append_log(result), result)

    is_critical = roll_critical(actor_stats.crit_chance, source.pick(rolls.crit_roll))
    defending = target.get_status(StatusEffectType.DEFENDING)

    breakdown = calculate_damage(
        attack=actor_stats.attack,
        defense=target_stats.defense,
        variance_roll=source.pick(rolls.damage_variance),
        is_critical=is_critical,
        crit_multiplier=actor_stats.crit_multiplier,
        defend_reduction=defending.value if defending else 0,
        config=config,
    )

    damaged = target.with_hp(target.stats.hp - breakdown.final_damage)
    killed = not damaged.is_alive

    message = f"{actor.name} attacks {target.name}"
    if is_critical:
        message += " with a CRITICAL HIT"
    message += f" for {breakdown.final_damage} damage!"
    if killed:
        message += f" {target.name} is defeated!"

    result = ActionResult(
        action=action,
        success=True,
        damage=breakdown.final_damage,
        is_critical=is_critical,
        was_dodged=False,
        was_blocked=defending is not None,
        target_killed=killed,
        message=message,
    )
    logger.debug(message)

    new_state = state.replace_combatant(damaged).append_log(result)
    if killed:
        new_state = prune_turn_order(new_state)

    return ActionOutcome(new_state, result)


def _process_defend(
    state: CombatState,
    action: CombatAction,
    actor: Combatant,
    config: CombatConfig,
) -> ActionOutcome:
    """Take a defensive stance, refreshing any stance already held."""
    effect = StatusEffect(
        type=StatusEffectType.DEFENDING,
        turns_remaining=config.defend_turns,
        value=config.defend_reduction,
        source_id=actor.id,
    )
    effects = tuple(
        e for e in actor.status_effects if e.type is not StatusEffectType.DEFENDING
    ) + (effect,)

    result = ActionResult(
        action=action,
        success=True,
        status_effect_applied=effect,
        message=f"{actor.name} takes a defensive stance!",
    )
    new_state = state.replace_combatant(actor.with_status_effects(effects)).append_log(result)
    return ActionOutcome(new_state, result)


def _process_flee(
    state: CombatState,
    action: CombatAction,
    actor: Combatant,
    rolls: RandomRolls,
    source: RollSource,
    config: CombatConfig,
) -> ActionOutcome:
    """Attempt to escape; a failed attempt still uses up the turn."""
    if not state.can_flee:
        return ActionOutcome(state, _failure(action, "Cannot flee from this battle!"))

    opponents = get_valid_targets(state, actor.id)
    chance = calculate_flee_chance(
        effective_stats(actor).speed,
        (effective_stats(c).speed for c in opponents),
        config,
    )

    if source.pick(rolls.hit_roll) * 100 < chance:
        result = ActionResult(
            action=action,
            success=True,
            flee_success=True,
            message=f"{actor.name} successfully escapes!",
        )
        new_state = state.evolve(phase=CombatPhase.FLED).append_log(result)
        return ActionOutcome(new_state, result)

    result = ActionResult(
        action=action,
        success=False,
        flee_success=False,
        message=f"{actor.name} failed to escape!",
    )
    return ActionOutcome(state.append_log(result), result)


def _process_item(
    state: CombatState,
    action: CombatAction,
    actor: Combatant,
    item_handler: Optional[ItemHandler],
) -> ActionOutcome:
    """Route an item action to the caller-supplied handler."""
    if item_handler is None:
        return ActionOutcome(state, _failure(action, "Item effects are not available"))

    outcome = item_handler(state, action, actor)
    new_state = prune_turn_order(outcome.state.append_log(outcome.result))
    return ActionOutcome(new_state, outcome.result)


@dataclass(frozen=True)
class AttackRoll:
    """Outcome of a standalone attack between two combatants."""
    hit: bool
    critical: bool
    damage: int
    message: str


def execute_attack(
    attacker: Combatant,
    defender: Combatant,
    rolls: Optional[RandomRolls] = None,
    rng: Optional[RollSource] = None,
    config: CombatConfig = DEFAULT_CONFIG,
) -> AttackRoll:
    """
    Roll one attack without touching any battle state.

    Uses the same hit, critical and damage math as process_action, so
    previews and scripted exchanges match real turns. Neither combatant
    is modified; apply the damage yourself if it should stick.
    """
    rolls = rolls or RandomRolls()
    source = rng if rng is not None else RollSource()
    attacker_stats = effective_stats(attacker)
    defender_stats = effective_stats(defender)

    hit_chance = calculate_hit_chance(attacker_stats.accuracy, defender_stats.evasion, config)
    if not roll_hit(hit_chance, source.pick(rolls.hit_roll)):
        return AttackRoll(
            hit=False,
            critical=False,
            damage=0,
            message=f"{attacker.name} misses {defender.name}!",
        )

    critical = roll_critical(attacker_stats.crit_chance, source.pick(rolls.crit_roll))
    defending = defender.get_status(StatusEffectType.DEFENDING)
    breakdown = calculate_damage(
        attack=attacker_stats.attack,
        defense=defender_stats.defense,
        variance_roll=source.pick(rolls.damage_variance),
        is_critical=critical,
        crit_multiplier=attacker_stats.crit_multiplier,
        defend_reduction=defending.value if defending else 0,
        config=config,
    )

    message = f"{attacker.name} hits {defender.name}"
    if critical:
        message += " with a CRITICAL HIT"
    message += f" for {breakdown.final_damage} damage!"

    return AttackRoll(hit=True, critical=critical, damage=breakdown.final_damage, message=message)
