"""
Status effect processing - once per round boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from skirmish.components import ActionResult, Combatant, StatusEffect
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG
from skirmish.battle.damage import calculate_status_effect_damage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusTickResult:
    """Roster after a status effect pass, plus the events it produced."""
    combatants: tuple[Combatant, ...]
    results: tuple[ActionResult, ...]


def tick_combatant(
    combatant: Combatant,
    config: CombatConfig = DEFAULT_CONFIG,
) -> tuple[Combatant, list[ActionResult]]:
    """
    Run one round of status effects on a single combatant.

    Each effect deals its per-round damage (if any), then loses a turn;
    an effect reaching zero turns is removed after this tick.
    """
    if not combatant.is_alive or not combatant.status_effects:
        return combatant, []

    hp = combatant.stats.hp
    remaining: list[StatusEffect] = []
    results: list[ActionResult] = []

    for effect in combatant.status_effects:
        if effect.type.is_damage_over_time:
            damage = calculate_status_effect_damage(
                effect, combatant.stats.max_hp, config.minimum_damage
            )
            hp = max(0, hp - damage)
            results.append(ActionResult(
                success=True,
                damage=damage,
                target_killed=hp == 0,
                message=f"{combatant.name} takes {damage} damage from {effect.type.value}!",
            ))

        if effect.turns_remaining > 1:
            remaining.append(effect.evolve(turns_remaining=effect.turns_remaining - 1))
        else:
            logger.debug(f"{effect.type.value} expired on {combatant.id}")

    updated = combatant.evolve(
        stats=combatant.stats.with_hp(hp),
        status_effects=tuple(remaining),
    )
    if combatant.is_alive and not updated.is_alive:
        results.append(ActionResult(
            success=True,
            target_killed=True,
            message=f"{combatant.name} is defeated!",
        ))

    return updated, results


def apply_status_effects(
    combatants: Sequence[Combatant],
    config: CombatConfig = DEFAULT_CONFIG,
) -> StatusTickResult:
    """Apply one round of status effects to every combatant."""
    updated: list[Combatant] = []
    results: list[ActionResult] = []

    for combatant in combatants:
        ticked, events = tick_combatant(combatant, config)
        updated.append(ticked)
        results.extend(events)

    return StatusTickResult(combatants=tuple(updated), results=tuple(results))
