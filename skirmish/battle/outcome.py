"""
Battle outcome - win/lose detection and reward calculation.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

from skirmish_engine.core.rng import RollSource
from skirmish.components import (
    CombatEncounter,
    CombatPhase,
    CombatRewards,
    CombatState,
    LootDrop,
)

logger = logging.getLogger(__name__)


class CombatOutcome(str, Enum):
    """How a battle stands from the player's point of view."""
    PLAYER_WINS = "player_wins"
    ENEMY_WINS = "enemy_wins"
    FLED = "fled"
    ONGOING = "ongoing"


def check_combat_end(state: CombatState) -> Optional[CombatPhase]:
    """
    Decide whether combat is over.

    Returns:
        DEFEAT if the player is down (even if every enemy fell at the
        same time), VICTORY if every enemy is down, otherwise None
    """
    player = state.player
    if player is None or not player.is_alive:
        return CombatPhase.DEFEAT

    if all(not enemy.is_alive for enemy in state.enemies):
        return CombatPhase.VICTORY

    return None


def update_combat_phase(state: CombatState) -> CombatState:
    """Move the state into its terminal phase when combat has ended."""
    if state.phase.is_terminal:
        return state

    end_phase = check_combat_end(state)
    if end_phase is None:
        return state

    logger.debug(f"Combat {state.id} ended in round {state.round}: {end_phase.value}")
    return state.evolve(phase=end_phase)


def get_combat_outcome(state: CombatState) -> CombatOutcome:
    """Summarize the battle phase as an outcome."""
    if state.phase is CombatPhase.VICTORY:
        return CombatOutcome.PLAYER_WINS
    if state.phase is CombatPhase.DEFEAT:
        return CombatOutcome.ENEMY_WINS
    if state.phase is CombatPhase.FLED:
        return CombatOutcome.FLED
    return CombatOutcome.ONGOING


def calculate_rewards(
    state: CombatState,
    encounter: CombatEncounter,
    drop_rolls: Optional[Sequence[float]] = None,
    rng: Optional[RollSource] = None,
) -> CombatRewards:
    """
    Calculate rewards from a battle.

    Base encounter rewards plus the xp/gold of every defeated enemy.
    Each item in the encounter's drop table is an independent trial that
    succeeds when its roll falls under the drop chance.

    Args:
        state: Battle state to read defeated enemies from
        encounter: Encounter supplying base rewards and the drop table
        drop_rolls: One roll per drop table entry, in table order
        rng: Source for rolls when drop_rolls is not given
    """
    items = encounter.rewards.items
    if drop_rolls is not None:
        if len(drop_rolls) != len(items):
            raise ValueError(
                f"Expected {len(items)} drop rolls for encounter '{encounter.id}', "
                f"got {len(drop_rolls)}"
            )
        rolls = list(drop_rolls)
    else:
        rolls = (rng or RollSource()).rolls(len(items))

    xp = encounter.rewards.xp
    gold = encounter.rewards.gold
    for enemy in state.enemies:
        if not enemy.is_alive:
            xp += enemy.xp_reward
            gold += enemy.gold_reward

    loot = tuple(
        LootDrop(item_id=drop.item_id, quantity=drop.quantity)
        for drop, roll in zip(items, rolls)
        if roll < drop.chance
    )

    return CombatRewards(xp=xp, gold=gold, loot=loot)
