"""
Combatants - participants in a battle.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from skirmish_engine.core.record import Record
from skirmish.components.combat import CombatStats, StatusEffect, StatusEffectType


class CombatantKind(str, Enum):
    """Which side a combatant fights on."""
    PLAYER = "player"
    ENEMY = "enemy"


class EnemyBehavior(str, Enum):
    """AI hint carried by enemies; action choice happens outside the engine."""
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    RANGED = "ranged"
    SUPPORT = "support"
    RANDOM = "random"


class Combatant(Record):
    """
    A participant in battle.

    Dead combatants stay in the roster so the log and rewards can
    refer to them; they simply drop out of turn order and targeting.
    """
    id: str
    definition_id: str
    name: str
    kind: CombatantKind
    stats: CombatStats
    status_effects: tuple[StatusEffect, ...] = ()

    # Player only
    weapon_id: Optional[str] = None

    # Enemy only
    behavior: Optional[EnemyBehavior] = None
    sprite_id: Optional[str] = None
    xp_reward: int = Field(default=0, ge=0)
    gold_reward: int = Field(default=0, ge=0)
    loot_table_id: Optional[str] = None

    @property
    def is_player(self) -> bool:
        """Check if this is the player character."""
        return self.kind is CombatantKind.PLAYER

    @property
    def is_alive(self) -> bool:
        """Alive exactly while hp is above zero."""
        return self.stats.hp > 0

    def has_status(self, status_type: StatusEffectType) -> bool:
        """Check for an active status effect of the given type."""
        return any(
            effect.type is status_type and effect.is_active
            for effect in self.status_effects
        )

    def get_status(self, status_type: StatusEffectType) -> Optional[StatusEffect]:
        """Get the first active status effect of the given type."""
        for effect in self.status_effects:
            if effect.type is status_type and effect.is_active:
                return effect
        return None

    def with_hp(self, hp: int) -> Combatant:
        """Copy with hp set (clamped); aliveness follows automatically."""
        return self.evolve(stats=self.stats.with_hp(hp))

    def with_status_effects(self, effects: tuple[StatusEffect, ...]) -> Combatant:
        """Copy with a replaced status effect list."""
        return self.evolve(status_effects=tuple(effects))
