"""
Battle system - stateful controller around the pure combat functions.

Holds the current CombatState and publishes CombatEvents so a
presentation layer can react without polling.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional, Sequence

from skirmish_engine.core.events import EventBus
from skirmish_engine.core.rng import RollSource
from skirmish.components import (
    ActionResult,
    Combatant,
    CombatAction,
    CombatEncounter,
    CombatInitContext,
    CombatPhase,
    CombatRewards,
    CombatState,
    RandomRolls,
    StatusEffectType,
)
from skirmish.battle.actions import ItemHandler, process_action
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG
from skirmish.battle.outcome import calculate_rewards, update_combat_phase
from skirmish.battle.setup import EnemyLookup, initialize_combat
from skirmish.battle.turn_order import advance_turn, begin_combat, get_current_combatant
from skirmish.battle.validation import get_valid_targets

logger = logging.getLogger(__name__)


class CombatEvent(Enum):
    """Events published by CombatSystem."""
    COMBAT_STARTED = auto()
    ACTION_RESOLVED = auto()
    COMBATANT_DEFEATED = auto()
    ROUND_STARTED = auto()
    COMBAT_ENDED = auto()


class CombatSystem:
    """
    Turn-based battle controller.

    Manages:
    - Battle initialization
    - Action resolution
    - Turn and round advancement
    - Win/lose/flee detection
    - Rewards

    Usage:
        system = CombatSystem(content.get_enemy, rng=RollSource(42))
        system.start(encounter, context)
        while not system.is_over:
            system.act(choose_action(system.state))
            system.end_turn()
    """

    def __init__(
        self,
        lookup_enemy_definition: EnemyLookup,
        rng: Optional[RollSource] = None,
        config: CombatConfig = DEFAULT_CONFIG,
        events: Optional[EventBus] = None,
        item_handler: Optional[ItemHandler] = None,
    ):
        self._lookup = lookup_enemy_definition
        self.rng = rng or RollSource()
        self.config = config
        self.events = events or EventBus()
        self._item_handler = item_handler

        self.state: Optional[CombatState] = None
        self.encounter: Optional[CombatEncounter] = None
        # Who has used the current turn; cleared whenever the turn moves on
        self._acted_id: Optional[str] = None

    def start(self, encounter: CombatEncounter, context: CombatInitContext) -> CombatState:
        """
        Start a battle.

        Raises:
            ContentLookupError: If the encounter references unknown enemies
        """
        state = initialize_combat(encounter, context, self._lookup, self.config)
        self.encounter = encounter
        self.state = begin_combat(state)
        self._acted_id = None

        logger.info(
            f"Combat {self.state.id} started: {len(self.state.enemies)} enemies, "
            f"order {list(self.state.turn_order)}"
        )
        self.events.publish(CombatEvent.COMBAT_STARTED, state=self.state)
        if self.state.is_over:
            self._publish_end()
        return self.state

    @property
    def is_over(self) -> bool:
        """Check if the battle has ended (or never started)."""
        return self.state is None or self.state.is_over

    @property
    def current_combatant(self) -> Optional[Combatant]:
        """Get the combatant whose turn it is."""
        if self.state is None or self.state.is_over:
            return None
        return get_current_combatant(self.state)

    def valid_targets(self, actor_id: Optional[str] = None) -> tuple[Combatant, ...]:
        """Get targets for an actor (default: the current combatant)."""
        if self.state is None:
            return ()
        if actor_id is None:
            current = self.current_combatant
            if current is None:
                return ()
            actor_id = current.id
        return get_valid_targets(self.state, actor_id)

    def act(self, action: CombatAction, rolls: Optional[RandomRolls] = None) -> ActionResult:
        """
        Resolve one action and update the battle phase.

        Only the current combatant may act, and only once per turn.
        Those rejections leave the state alone and publish nothing.
        """
        before = self._require_state()

        current = self.current_combatant
        if current is not None:
            if self._acted_id is not None:
                acted = before.get_combatant(self._acted_id)
                return self._reject(action, f"{acted.name} has already acted this turn")
            if action.actor_id != current.id:
                return self._reject(action, f"It is not {action.actor_id}'s turn")

        outcome = process_action(
            before,
            action,
            rolls,
            rng=self.rng,
            config=self.config,
            item_handler=self._item_handler,
        )
        self.state = update_combat_phase(outcome.state)
        if outcome.state is not before:
            self._acted_id = action.actor_id

        self.events.publish(
            CombatEvent.ACTION_RESOLVED,
            result=outcome.result,
            state=self.state,
        )
        self._publish_transition(before)
        return outcome.result

    def skip_turn(self) -> Optional[ActionResult]:
        """Forfeit the current combatant's turn (stunned or otherwise unable to act)."""
        state = self._require_state()
        current = get_current_combatant(state)
        if current is None or state.is_over:
            return None

        if current.has_status(StatusEffectType.STUNNED):
            message = f"{current.name} is stunned and cannot act!"
        else:
            message = f"{current.name} skips the turn."
        result = ActionResult(success=False, message=message)
        self.state = state.append_log(result)
        self.end_turn()
        return result

    def end_turn(self) -> CombatState:
        """Hand the turn to the next combatant, starting a new round if needed."""
        before = self._require_state()
        self.state = advance_turn(before, self.config)
        self._acted_id = None

        if self.state.round != before.round:
            self.events.publish(
                CombatEvent.ROUND_STARTED,
                round=self.state.round,
                state=self.state,
            )
        self._publish_transition(before)
        return self.state

    def rewards(self, drop_rolls: Optional[Sequence[float]] = None) -> Optional[CombatRewards]:
        """Rewards for a won battle; None for any other outcome."""
        if self.state is None or self.encounter is None:
            return None
        if self.state.phase is not CombatPhase.VICTORY:
            return None
        return calculate_rewards(self.state, self.encounter, drop_rolls, self.rng)

    def _reject(self, action: CombatAction, message: str) -> ActionResult:
        logger.debug(f"Rejected {action.type.value} by {action.actor_id}: {message}")
        return ActionResult(action=action, success=False, message=message)

    def _require_state(self) -> CombatState:
        if self.state is None:
            raise RuntimeError("No battle in progress; call start() first")
        return self.state

    def _publish_transition(self, before: CombatState) -> None:
        """Publish defeats and the battle end caused by moving from ``before``."""
        for combatant in self.state.combatants:
            previous = before.get_combatant(combatant.id)
            if previous is not None and previous.is_alive and not combatant.is_alive:
                logger.debug(f"{combatant.id} defeated in round {self.state.round}")
                self.events.publish(
                    CombatEvent.COMBATANT_DEFEATED,
                    combatant=combatant,
                    state=self.state,
                )

        if self.state.is_over and not before.is_over:
            self._publish_end()

    def _publish_end(self) -> None:
        logger.info(
            f"Combat {self.state.id} ended in round {self.state.round}: "
            f"{self.state.phase.value}"
        )
        self.events.publish(
            CombatEvent.COMBAT_ENDED,
            phase=self.state.phase,
            state=self.state,
        )
