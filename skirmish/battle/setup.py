"""
Battle setup - assemble the initial combat state from an encounter.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from skirmish_engine.core.errors import ContentLookupError
from skirmish.components import (
    Combatant,
    CombatEncounter,
    CombatInitContext,
    CombatPhase,
    CombatState,
    CombatStats,
    EnemyDefinition,
    EncounterEnemy,
    EncounterRewards,
)
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG
from skirmish.battle.factory import create_enemy_combatant, create_player_combatant
from skirmish.battle.turn_order import calculate_turn_order

logger = logging.getLogger(__name__)

EnemyLookup = Callable[[str], Optional[EnemyDefinition]]


def spawn_enemies(
    encounter: CombatEncounter,
    lookup_enemy_definition: EnemyLookup,
    config: CombatConfig = DEFAULT_CONFIG,
) -> list[Combatant]:
    """
    Create every enemy instance listed by an encounter, in roster order.

    Instance numbering is per enemy type, so a second group of the same
    type continues where the first stopped.

    Raises:
        ContentLookupError: If any enemy id cannot be resolved
    """
    spawned: list[Combatant] = []
    next_index: dict[str, int] = {}

    for entry in encounter.enemies:
        definition = lookup_enemy_definition(entry.enemy_id)
        if definition is None:
            raise ContentLookupError(entry.enemy_id, f"encounter '{encounter.id}'")

        start = next_index.get(entry.enemy_id, 0)
        for index in range(start, start + entry.count):
            spawned.append(create_enemy_combatant(definition, index, config))
        next_index[entry.enemy_id] = start + entry.count

    return spawned


def initialize_combat(
    encounter: CombatEncounter,
    context: CombatInitContext,
    lookup_enemy_definition: EnemyLookup,
    config: CombatConfig = DEFAULT_CONFIG,
) -> CombatState:
    """
    Build the starting state of a battle.

    Args:
        encounter: Encounter to fight
        context: Player name, stats and weapon
        lookup_enemy_definition: Content lookup, returns None for unknown ids
        config: Tuning constants

    Returns:
        State in the initializing phase, round 1, with turn order computed

    Raises:
        ContentLookupError: If the encounter references unknown enemies
    """
    player = create_player_combatant(
        context.player_name,
        context.player_stats,
        context.player_weapon_id,
    )
    enemies = spawn_enemies(encounter, lookup_enemy_definition, config)
    combatants = (player, *enemies)

    logger.debug(
        f"Initialized encounter '{encounter.id}' with {len(enemies)} enemies"
    )

    return CombatState(
        id=f"combat_{encounter.id}",
        encounter_id=encounter.id,
        combatants=combatants,
        turn_order=calculate_turn_order(combatants),
        current_turn_index=0,
        round=1,
        phase=CombatPhase.INITIALIZING,
        can_flee=encounter.can_flee,
        is_boss=encounter.is_boss,
        log=(),
        max_log_entries=config.max_log_entries,
    )


def quick_encounter(
    enemies: Sequence[tuple[EnemyDefinition, int]],
    can_flee: bool = True,
) -> CombatEncounter:
    """
    Throwaway encounter from (definition, count) pairs.

    Rewards are the summed xp and gold of every enemy, with no items.
    The id is derived from the enemy ids so the same roster always
    yields the same encounter.
    """
    encounter_id = "quick_combat_" + "_".join(dict.fromkeys(d.id for d, _ in enemies))
    return CombatEncounter(
        id=encounter_id,
        name="Quick Combat",
        enemies=tuple(
            EncounterEnemy(enemy_id=definition.id, count=count)
            for definition, count in enemies
        ),
        min_level=1,
        is_boss=False,
        can_flee=can_flee,
        rewards=EncounterRewards(
            xp=sum(definition.xp_reward * count for definition, count in enemies),
            gold=sum(definition.gold_reward * count for definition, count in enemies),
        ),
        tags=("quick_combat",),
    )


def create_quick_combat(
    player_stats: CombatStats,
    enemies: Sequence[tuple[EnemyDefinition, int]],
    can_flee: bool = True,
    config: CombatConfig = DEFAULT_CONFIG,
) -> CombatState:
    """
    Initial state for an ad-hoc fight, without authored content.

    Handy for tests and scripted sequences.

    Args:
        player_stats: Stats for a player named "Player"
        enemies: Enemy definitions and how many of each to spawn
        can_flee: Whether fleeing is allowed
        config: Tuning constants

    Returns:
        State in the initializing phase, as from initialize_combat()
    """
    encounter = quick_encounter(enemies, can_flee)
    definitions = {definition.id: definition for definition, _ in enemies}
    context = CombatInitContext(
        player_stats=player_stats,
        player_name="Player",
        encounter_id=encounter.id,
    )
    return initialize_combat(encounter, context, definitions.get, config)
