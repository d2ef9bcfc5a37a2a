"""
Action validation and target queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from skirmish.components import (
    ActionType,
    Combatant,
    CombatAction,
    CombatState,
    StatusEffectType,
)


@dataclass(frozen=True)
class ValidationResult:
    """Whether an action may be taken, and why not."""
    valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


VALID = ValidationResult(valid=True)


def is_action_valid(
    state: CombatState,
    action: CombatAction,
    actor: Combatant,
) -> ValidationResult:
    """
    Check an action before it touches any state.

    Rules are checked in order and the first failure wins: dead actor,
    stunned actor, attack without target, flee from an unfleeable
    battle, battle already over, item without an item.
    """
    if not actor.is_alive:
        return ValidationResult(False, f"{actor.name} is dead and cannot act")

    if actor.has_status(StatusEffectType.STUNNED):
        return ValidationResult(False, f"{actor.name} is stunned and cannot act")

    if action.type is ActionType.ATTACK and not action.target_id:
        return ValidationResult(False, "No target specified for attack")

    if action.type is ActionType.FLEE and not state.can_flee:
        return ValidationResult(False, "Cannot flee from this battle")

    if state.phase.is_terminal:
        return ValidationResult(False, "Combat is already over")

    if action.type is ActionType.ITEM and not action.item_id:
        return ValidationResult(False, "No item specified")

    return VALID


def get_valid_targets(state: CombatState, actor_id: str) -> tuple[Combatant, ...]:
    """
    Get living combatants the actor may attack.

    The player targets enemies; enemies target the player.
    """
    actor = state.get_combatant(actor_id)
    if actor is None:
        return ()

    return tuple(
        c for c in state.combatants
        if c.is_alive and c.is_player != actor.is_player
    )
