"""
Content definitions - enemy types and encounters.

These describe what a battle *contains*; the content layer loads them
and the battle module turns them into runtime combatants.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from skirmish_engine.core.record import Record
from skirmish.components.combat import CombatStats
from skirmish.components.combatant import EnemyBehavior


class EnemyDefinition(Record):
    """Static data for an enemy type."""
    id: str
    name: str
    type: Optional[str] = None
    faction: Optional[str] = None

    # Base stats
    max_health: int = Field(ge=1)
    action_points: int = Field(default=4, ge=1, le=10)
    base_damage: int = Field(default=5, ge=0)
    armor: int = Field(default=0, ge=0)
    accuracy_mod: int = Field(default=0, ge=-50, le=50)
    evasion: int = Field(default=10, ge=0, le=100)

    # Rewards
    xp_reward: int = Field(default=10, ge=0)
    gold_reward: int = Field(default=0, ge=0)
    loot_table_id: Optional[str] = None

    # AI and display
    behavior: EnemyBehavior = EnemyBehavior.AGGRESSIVE
    weapon_id: Optional[str] = None
    sprite_id: Optional[str] = None
    description: Optional[str] = None
    tags: tuple[str, ...] = ()


class EncounterEnemy(Record):
    """One enemy group in an encounter roster."""
    enemy_id: str
    count: int = Field(default=1, ge=1)


class ItemDrop(Record):
    """An item that may drop after a won battle."""
    item_id: str
    quantity: int = Field(default=1, ge=1)
    chance: float = Field(default=1.0, ge=0.0, le=1.0)


class EncounterRewards(Record):
    """Base rewards for winning an encounter."""
    xp: int = Field(default=0, ge=0)
    gold: int = Field(default=0, ge=0)
    items: tuple[ItemDrop, ...] = ()


class CombatEncounter(Record):
    """A pre-configured battle."""
    id: str
    name: str
    description: Optional[str] = None
    enemies: tuple[EncounterEnemy, ...] = Field(min_length=1)
    min_level: int = Field(default=1, ge=1)
    is_boss: bool = False
    can_flee: bool = True
    rewards: EncounterRewards = EncounterRewards()
    tags: tuple[str, ...] = ()


class CombatInitContext(Record):
    """Player-side inputs needed to start a battle."""
    player_stats: CombatStats
    player_name: str
    player_weapon_id: Optional[str] = None
    encounter_id: Optional[str] = None
