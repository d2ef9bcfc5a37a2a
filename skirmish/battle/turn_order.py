"""
Turn order - speed ranking, turn advancement and round boundaries.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from skirmish.components import Combatant, CombatPhase, CombatState
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG
from skirmish.battle.damage import effective_stats
from skirmish.battle.outcome import check_combat_end
from skirmish.battle.status import apply_status_effects

logger = logging.getLogger(__name__)


def calculate_turn_order(combatants: Sequence[Combatant]) -> tuple[str, ...]:
    """
    Order living combatants by effective speed, fastest first.

    Ties go to the player; tied enemies keep roster order.
    """
    living = [c for c in combatants if c.is_alive]
    ranked = sorted(
        living,
        key=lambda c: (-effective_stats(c).speed, 0 if c.is_player else 1),
    )
    return tuple(c.id for c in ranked)


def get_current_combatant(state: CombatState) -> Optional[Combatant]:
    """Get the combatant whose turn it is."""
    if not state.turn_order:
        return None
    return state.get_combatant(state.turn_order[state.current_turn_index])


def phase_for(combatant: Combatant) -> CombatPhase:
    """Turn phase matching the side of the acting combatant."""
    return CombatPhase.PLAYER_TURN if combatant.is_player else CombatPhase.ENEMY_TURN


def begin_combat(state: CombatState) -> CombatState:
    """Leave the initializing phase and hand the first turn out."""
    if state.phase is not CombatPhase.INITIALIZING:
        return state

    end_phase = check_combat_end(state)
    if end_phase is not None:
        return state.evolve(phase=end_phase)

    current = get_current_combatant(state)
    return state.evolve(phase=phase_for(current))


def prune_turn_order(state: CombatState) -> CombatState:
    """
    Drop fallen combatants from the turn order mid-round.

    The remaining order is kept as is, and the index keeps pointing at
    the same combatant. When the current combatant fell the index moves
    to the next living one and ``turn_pending`` is set, so the next
    advance hands that combatant its turn instead of skipping past it.
    """
    alive = {c.id for c in state.combatants if c.is_alive}
    if all(cid in alive for cid in state.turn_order):
        return state

    before = state.turn_order[:state.current_turn_index]
    after = state.turn_order[state.current_turn_index:]
    kept_before = tuple(cid for cid in before if cid in alive)
    kept_after = tuple(cid for cid in after if cid in alive)

    turn_order = kept_before + kept_after
    index = len(kept_before)
    pending = state.turn_pending or (bool(after) and after[0] not in alive)
    if index >= len(turn_order):
        # Everyone after the cursor fell; the next advance starts a new round
        index = max(0, len(turn_order) - 1)
        pending = False

    return state.evolve(
        turn_order=turn_order,
        current_turn_index=index,
        turn_pending=pending,
    )


def start_new_round(state: CombatState, config: CombatConfig = DEFAULT_CONFIG) -> CombatState:
    """
    Begin the next round.

    Status effects tick once for the whole roster, then turn order is
    rebuilt from whoever is still standing.
    """
    tick = apply_status_effects(state.combatants, config)
    turn_order = calculate_turn_order(tick.combatants)

    updated = state.evolve(
        combatants=tick.combatants,
        turn_order=turn_order,
        current_turn_index=0,
        turn_pending=False,
        round=state.round + 1,
    ).append_log(*tick.results)

    logger.debug(f"Combat {state.id}: round {updated.round}, order {list(turn_order)}")

    end_phase = check_combat_end(updated)
    if end_phase is not None:
        return updated.evolve(phase=end_phase)
    if not turn_order:
        # Unreachable while the player is alive, but never hand out a turn to nobody
        return updated.evolve(phase=CombatPhase.DEFEAT)

    return updated.evolve(phase=phase_for(updated.get_combatant(turn_order[0])))


def advance_turn(state: CombatState, config: CombatConfig = DEFAULT_CONFIG) -> CombatState:
    """
    Move to the next living combatant in turn order.

    Entries that died since the order was built are skipped. Running
    past the end starts a new round. Combat that has already ended, or
    ends now, is returned in its terminal phase.
    """
    if state.phase.is_terminal:
        return state

    end_phase = check_combat_end(state)
    if end_phase is not None:
        return state.evolve(phase=end_phase)

    start = state.current_turn_index if state.turn_pending else state.current_turn_index + 1
    for index in range(start, len(state.turn_order)):
        combatant = state.get_combatant(state.turn_order[index])
        if combatant is not None and combatant.is_alive:
            return state.evolve(
                current_turn_index=index,
                turn_pending=False,
                phase=phase_for(combatant),
            )

    return start_new_round(state, config)
