"""
Combat components - data-only record definitions.

All components are immutable Pydantic records containing only data.
Logic lives in the battle module, not in components.
"""

from skirmish.components.combat import (
    CombatStats,
    StatusEffect,
    StatusEffectType,
)
from skirmish.components.combatant import (
    Combatant,
    CombatantKind,
    EnemyBehavior,
)
from skirmish.components.content import (
    CombatEncounter,
    CombatInitContext,
    EncounterEnemy,
    EncounterRewards,
    EnemyDefinition,
    ItemDrop,
)
from skirmish.components.state import (
    ActionResult,
    ActionType,
    CombatAction,
    CombatPhase,
    CombatRewards,
    CombatState,
    LootDrop,
    RandomRolls,
)

__all__ = [
    # Combat
    "CombatStats",
    "StatusEffect",
    "StatusEffectType",
    # Combatant
    "Combatant",
    "CombatantKind",
    "EnemyBehavior",
    # Content
    "CombatEncounter",
    "CombatInitContext",
    "EncounterEnemy",
    "EncounterRewards",
    "EnemyDefinition",
    "ItemDrop",
    # State
    "ActionResult",
    "ActionType",
    "CombatAction",
    "CombatPhase",
    "CombatRewards",
    "CombatState",
    "LootDrop",
    "RandomRolls",
]
