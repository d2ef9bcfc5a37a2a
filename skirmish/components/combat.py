"""
Combat components - battle stats and status effects.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from skirmish_engine.core.record import Record


class StatusEffectType(str, Enum):
    """Status effect types."""
    # Damage over time
    POISONED = "poisoned"
    BURNING = "burning"
    BLEEDING = "bleeding"
    # Control
    STUNNED = "stunned"
    # Stat modifiers
    BUFFED = "buffed"
    DEBUFFED = "debuffed"
    DEFENDING = "defending"

    @property
    def is_damage_over_time(self) -> bool:
        """Check if this effect deals damage every round."""
        return self in _DAMAGE_OVER_TIME

    @property
    def is_debuff(self) -> bool:
        """Check if this is a negative effect."""
        return self in _DAMAGE_OVER_TIME or self in (
            StatusEffectType.STUNNED,
            StatusEffectType.DEBUFFED,
        )


_DAMAGE_OVER_TIME = frozenset({
    StatusEffectType.POISONED,
    StatusEffectType.BURNING,
    StatusEffectType.BLEEDING,
})


class StatusEffect(Record):
    """
    A single status effect instance.

    Attributes:
        type: Type of status
        turns_remaining: Rounds left, including the current one
        value: Magnitude (damage per round, percent modifier, etc.)
        source_id: Combatant that applied this effect
    """
    type: StatusEffectType
    turns_remaining: int = Field(default=1, ge=0)
    value: int = 0
    source_id: Optional[str] = None

    @property
    def is_active(self) -> bool:
        """Check if the effect still applies."""
        return self.turns_remaining > 0


class CombatStats(Record):
    """
    Combat statistics for a combatant.

    Attributes:
        hp: Current health points, always within [0, max_hp]
        max_hp: Maximum health points
        attack: Attack power
        defense: Flat damage reduction
        speed: Turn order priority
        accuracy: Hit chance, 0-100 scale
        evasion: Dodge chance, 0-100 scale
        crit_chance: Critical hit chance, 0-100 scale
        crit_multiplier: Critical damage multiplier
    """
    hp: int = Field(default=100, ge=0)
    max_hp: int = Field(default=100, ge=1)
    attack: int = 10
    defense: int = 5
    speed: int = 10
    accuracy: float = 75.0
    evasion: float = 10.0
    crit_chance: float = 10.0
    crit_multiplier: float = 1.5

    @model_validator(mode="after")
    def _check_hp_bounds(self) -> CombatStats:
        if self.hp > self.max_hp:
            raise ValueError(f"hp {self.hp} exceeds max_hp {self.max_hp}")
        return self

    def with_hp(self, hp: int) -> CombatStats:
        """Copy with hp clamped into [0, max_hp]."""
        return self.evolve(hp=max(0, min(self.max_hp, hp)))
