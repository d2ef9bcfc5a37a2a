"""
Battle module - turn-based combat resolution.

The functions here are pure: each takes a CombatState and returns a new
one. CombatSystem wraps them for callers that want a stateful
controller with events.
"""

from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG
from skirmish.battle.damage import (
    DamageBreakdown,
    effective_stats,
    calculate_hit_chance,
    calculate_damage,
    calculate_heal,
    calculate_status_effect_damage,
    calculate_flee_chance,
)
from skirmish.battle.factory import (
    PLAYER_ID,
    create_player_combatant,
    create_enemy_combatant,
)
from skirmish.battle.turn_order import (
    calculate_turn_order,
    get_current_combatant,
    begin_combat,
    advance_turn,
    start_new_round,
)
from skirmish.battle.setup import (
    EnemyLookup,
    spawn_enemies,
    initialize_combat,
    quick_encounter,
    create_quick_combat,
)
from skirmish.battle.validation import ValidationResult, is_action_valid, get_valid_targets
from skirmish.battle.status import StatusTickResult, apply_status_effects
from skirmish.battle.outcome import (
    CombatOutcome,
    check_combat_end,
    update_combat_phase,
    get_combat_outcome,
    calculate_rewards,
)
from skirmish.battle.actions import (
    ActionOutcome,
    AttackRoll,
    ItemHandler,
    process_action,
    execute_attack,
)
from skirmish.battle.system import CombatEvent, CombatSystem
from skirmish.battle.persistence import dump_state, load_state, save_state_file, load_state_file
from skirmish.battle.content import ContentDatabase

__all__ = [
    # Config
    "CombatConfig",
    "DEFAULT_CONFIG",
    # Damage
    "DamageBreakdown",
    "effective_stats",
    "calculate_hit_chance",
    "calculate_damage",
    "calculate_heal",
    "calculate_status_effect_damage",
    "calculate_flee_chance",
    # Factory
    "PLAYER_ID",
    "create_player_combatant",
    "create_enemy_combatant",
    # Turn order
    "calculate_turn_order",
    "get_current_combatant",
    "begin_combat",
    "advance_turn",
    "start_new_round",
    # Setup
    "EnemyLookup",
    "spawn_enemies",
    "initialize_combat",
    "quick_encounter",
    "create_quick_combat",
    # Validation
    "ValidationResult",
    "is_action_valid",
    "get_valid_targets",
    # Status effects
    "StatusTickResult",
    "apply_status_effects",
    # Outcome
    "CombatOutcome",
    "check_combat_end",
    "update_combat_phase",
    "get_combat_outcome",
    "calculate_rewards",
    # Actions
    "ActionOutcome",
    "AttackRoll",
    "ItemHandler",
    "process_action",
    "execute_attack",
    # System
    "CombatEvent",
    "CombatSystem",
    # Persistence
    "dump_state",
    "load_state",
    "save_state_file",
    "load_state_file",
    # Content
    "ContentDatabase",
]
