"""
Battle state components - actions, results, and the combat state itself.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from skirmish_engine.core.record import Record
from skirmish.components.combat import StatusEffect
from skirmish.components.combatant import Combatant


class CombatPhase(str, Enum):
    """Stage of the combat state machine."""
    INITIALIZING = "initializing"
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"

    @property
    def is_terminal(self) -> bool:
        """Check if combat is over in this phase."""
        return self in (CombatPhase.VICTORY, CombatPhase.DEFEAT, CombatPhase.FLED)


class ActionType(str, Enum):
    """Types of battle actions."""
    ATTACK = "attack"
    DEFEND = "defend"
    FLEE = "flee"
    ITEM = "item"


class CombatAction(Record):
    """An action chosen by the player or by enemy AI, consumed once."""
    type: ActionType
    actor_id: str
    target_id: Optional[str] = None
    item_id: Optional[str] = None


class RandomRolls(Record):
    """
    Pre-drawn rolls for one action.

    Any roll left as None is drawn from a RollSource. Flee attempts
    use hit_roll.
    """
    hit_roll: Optional[float] = Field(default=None, ge=0.0, lt=1.0)
    crit_roll: Optional[float] = Field(default=None, ge=0.0, lt=1.0)
    damage_variance: Optional[float] = Field(default=None, ge=0.0, lt=1.0)


class ActionResult(Record):
    """Result of executing a battle action or a status effect tick."""
    success: bool
    message: str
    action: Optional[CombatAction] = None
    damage: Optional[int] = None
    heal_amount: Optional[int] = None
    is_critical: Optional[bool] = None
    was_dodged: Optional[bool] = None
    was_blocked: Optional[bool] = None
    target_killed: Optional[bool] = None
    flee_success: Optional[bool] = None
    status_effect_applied: Optional[StatusEffect] = None


class LootDrop(Record):
    """An item awarded after battle."""
    item_id: str
    quantity: int = 1


class CombatRewards(Record):
    """Rewards earned from a battle."""
    xp: int = 0
    gold: int = 0
    loot: tuple[LootDrop, ...] = ()


class CombatState(Record):
    """
    Complete state of a battle in progress.

    Combatants are ordered player first, then enemies in spawn order.
    Turn order holds ids of living combatants only.
    """
    id: str
    encounter_id: str
    combatants: tuple[Combatant, ...]
    turn_order: tuple[str, ...] = ()
    current_turn_index: int = Field(default=0, ge=0)
    # Cursor already sits on the next combatant, whose turn has not begun
    turn_pending: bool = False
    round: int = Field(default=1, ge=1)
    phase: CombatPhase = CombatPhase.INITIALIZING
    can_flee: bool = True
    is_boss: bool = False
    log: tuple[ActionResult, ...] = ()
    max_log_entries: int = Field(default=50, ge=1)

    @model_validator(mode="after")
    def _check_turn_index(self) -> CombatState:
        if self.turn_order and self.current_turn_index >= len(self.turn_order):
            raise ValueError(
                f"current_turn_index {self.current_turn_index} outside turn order "
                f"of length {len(self.turn_order)}"
            )
        return self

    @property
    def player(self) -> Optional[Combatant]:
        """Get the player combatant."""
        return next((c for c in self.combatants if c.is_player), None)

    @property
    def enemies(self) -> tuple[Combatant, ...]:
        """Get all enemy combatants, dead or alive."""
        return tuple(c for c in self.combatants if not c.is_player)

    @property
    def is_over(self) -> bool:
        """Check if combat has reached a terminal phase."""
        return self.phase.is_terminal

    def get_combatant(self, combatant_id: Optional[str]) -> Optional[Combatant]:
        """Find a combatant by id."""
        if combatant_id is None:
            return None
        return next((c for c in self.combatants if c.id == combatant_id), None)

    def replace_combatant(self, combatant: Combatant) -> CombatState:
        """Copy with the same-id combatant swapped for ``combatant``."""
        return self.evolve(combatants=tuple(
            combatant if c.id == combatant.id else c for c in self.combatants
        ))

    def append_log(self, *results: ActionResult) -> CombatState:
        """Copy with results appended, keeping only the newest entries."""
        log = (self.log + results)[-self.max_log_entries:]
        return self.evolve(log=log)
