"""
Combatant factory - builds battle participants from player stats and content.
"""

from __future__ import annotations

import string
from typing import Optional

from skirmish_engine.core.errors import ContentLookupError
from skirmish.components import (
    Combatant,
    CombatantKind,
    CombatStats,
    EnemyDefinition,
)
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG

PLAYER_ID = "player"


def instance_letters(index: int) -> str:
    """
    Letter label for the index-th instance of an enemy type.

    Base-26 over A-Z: 0 -> "A", 1 -> "B", 25 -> "Z", 26 -> "BA".
    """
    if index < 0:
        raise ValueError(f"Instance index must be non-negative, got {index}")

    letters = ""
    while True:
        index, remainder = divmod(index, 26)
        letters = string.ascii_uppercase[remainder] + letters
        if index == 0:
            return letters


def instance_name(name: str, index: int) -> str:
    """Display name for an enemy instance; the first keeps the plain name."""
    if index == 0:
        return name
    return f"{name} {instance_letters(index)}"


def create_player_combatant(
    name: str,
    stats: CombatStats,
    weapon_id: Optional[str] = None,
) -> Combatant:
    """Create the player combatant."""
    return Combatant(
        id=PLAYER_ID,
        definition_id=PLAYER_ID,
        name=name,
        kind=CombatantKind.PLAYER,
        stats=stats,
        weapon_id=weapon_id,
    )


def create_enemy_combatant(
    definition: Optional[EnemyDefinition],
    index: int = 0,
    config: CombatConfig = DEFAULT_CONFIG,
) -> Combatant:
    """
    Create an enemy combatant from its definition.

    Args:
        definition: Enemy content; None means the lookup failed
        index: Instance number of this enemy type within the battle
        config: Baselines for stats the definition does not carry

    Raises:
        ContentLookupError: If the definition is missing
    """
    if definition is None:
        raise ContentLookupError("<missing enemy definition>", f"enemy instance {index}")

    stats = CombatStats(
        hp=definition.max_health,
        max_hp=definition.max_health,
        attack=definition.base_damage,
        defense=definition.armor,
        speed=definition.action_points,
        accuracy=config.enemy_base_accuracy + definition.accuracy_mod,
        evasion=definition.evasion,
        crit_chance=config.enemy_crit_chance,
        crit_multiplier=config.enemy_crit_multiplier,
    )

    return Combatant(
        id=f"{definition.id}_{index}",
        definition_id=definition.id,
        name=instance_name(definition.name, index),
        kind=CombatantKind.ENEMY,
        stats=stats,
        weapon_id=definition.weapon_id,
        behavior=definition.behavior,
        sprite_id=definition.sprite_id,
        xp_reward=definition.xp_reward,
        gold_reward=definition.gold_reward,
        loot_table_id=definition.loot_table_id,
    )
