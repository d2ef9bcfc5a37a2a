"""
Damage calculator - hit, critical, damage and flee math.

Every function here is deterministic: randomness arrives as an
explicit roll in [0, 1).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from skirmish.components import (
    Combatant,
    CombatStats,
    StatusEffect,
    StatusEffectType,
)
from skirmish.battle.config import CombatConfig, DEFAULT_CONFIG


@dataclass(frozen=True)
class DamageBreakdown:
    """Final damage plus the intermediate values that produced it."""
    final_damage: int
    base_damage: int
    variance_applied: int
    crit_multiplier_applied: float
    fatigue_penalty_applied: int
    type_effectiveness_applied: float
    reduction_applied: int


def effective_stats(combatant: Combatant) -> CombatStats:
    """
    Apply status effect modifiers to a combatant's stats.

    Buffed raises attack and defense by value percent, debuffed lowers
    attack and accuracy by value percent, stunned drops speed to 0.
    Defending is handled as incoming damage reduction instead.
    """
    stats = combatant.stats
    attack = stats.attack
    defense = stats.defense
    accuracy = stats.accuracy
    speed = stats.speed

    for effect in combatant.status_effects:
        if not effect.is_active:
            continue
        if effect.type is StatusEffectType.BUFFED:
            attack = math.floor(attack * (1 + effect.value / 100))
            defense = math.floor(defense * (1 + effect.value / 100))
        elif effect.type is StatusEffectType.DEBUFFED:
            attack = math.floor(attack * (1 - effect.value / 100))
            accuracy = math.floor(accuracy * (1 - effect.value / 100))
        elif effect.type is StatusEffectType.STUNNED:
            speed = 0

    return stats.evolve(attack=attack, defense=defense, accuracy=accuracy, speed=speed)


def calculate_hit_chance(
    attacker_accuracy: float,
    defender_evasion: float,
    config: CombatConfig = DEFAULT_CONFIG,
) -> float:
    """Hit chance (0-100) as accuracy minus evasion, clamped."""
    raw_chance = attacker_accuracy - defender_evasion
    return max(config.min_hit_chance, min(config.max_hit_chance, raw_chance))


def roll_hit(hit_chance: float, roll: float) -> bool:
    """An attack hits when the roll falls under the hit chance."""
    return roll * 100 < hit_chance


def roll_critical(crit_chance: float, roll: float) -> bool:
    """An attack crits when the roll falls under the crit chance."""
    return roll * 100 < crit_chance


def calculate_base_damage(
    attack: int,
    defense: int,
    config: CombatConfig = DEFAULT_CONFIG,
) -> int:
    """Attack minus defense, never below the minimum damage."""
    return max(config.minimum_damage, math.floor(attack - defense))


def apply_variance(
    base_damage: int,
    variance_factor: float,
    roll: float,
    minimum: int = 1,
) -> int:
    """
    Scale damage around its base value.

    A roll of 0.5 leaves damage unchanged, 0.0 gives -variance and
    rolls near 1.0 approach +variance.
    """
    multiplier = 1 + (roll * 2 - 1) * variance_factor
    return max(minimum, math.floor(base_damage * multiplier))


def apply_critical_multiplier(damage: int, is_critical: bool, multiplier: float) -> int:
    """Multiply damage on a critical hit."""
    if not is_critical:
        return damage
    return math.floor(damage * multiplier)


def apply_fatigue_penalty(
    damage: int,
    fatigue: float,
    max_penalty: float = 0.3,
    minimum: int = 1,
) -> int:
    """
    Weaken damage from a tired attacker.

    Fatigue runs 0-100 (clamped); full fatigue removes ``max_penalty``
    of the damage.
    """
    penalty = max(0.0, min(100.0, fatigue)) / 100 * max_penalty
    return max(minimum, math.floor(damage * (1 - penalty)))


def apply_type_effectiveness(damage: int, effectiveness: float, minimum: int = 1) -> int:
    """Scale damage by an elemental or type matchup multiplier."""
    return max(minimum, math.floor(damage * effectiveness))


def apply_defense_reduction(damage: int, reduction_percent: float, minimum: int = 1) -> int:
    """Reduce incoming damage for a defending target."""
    if reduction_percent <= 0:
        return damage
    return max(minimum, math.floor(damage * (1 - reduction_percent / 100)))


def calculate_damage(
    attack: int,
    defense: int,
    variance_roll: float,
    is_critical: bool = False,
    crit_multiplier: float = 1.5,
    defend_reduction: float = 0,
    config: CombatConfig = DEFAULT_CONFIG,
    fatigue: float = 0,
    type_effectiveness: float = 1.0,
) -> DamageBreakdown:
    """
    Run the full damage formula.

    Steps: base damage, variance, critical multiplier, fatigue penalty,
    type effectiveness, defend reduction. Fatigue and effectiveness
    default to values that leave damage untouched.
    """
    minimum = config.minimum_damage
    base_damage = calculate_base_damage(attack, defense, config)
    after_variance = apply_variance(base_damage, config.damage_variance, variance_roll, minimum)
    after_crit = apply_critical_multiplier(after_variance, is_critical, crit_multiplier)
    after_fatigue = apply_fatigue_penalty(after_crit, fatigue, config.max_fatigue_penalty, minimum)
    after_type = apply_type_effectiveness(after_fatigue, type_effectiveness, minimum)
    final_damage = apply_defense_reduction(after_type, defend_reduction, minimum)

    return DamageBreakdown(
        final_damage=final_damage,
        base_damage=base_damage,
        variance_applied=after_variance - base_damage,
        crit_multiplier_applied=crit_multiplier if is_critical else 1.0,
        fatigue_penalty_applied=after_crit - after_fatigue,
        type_effectiveness_applied=type_effectiveness,
        reduction_applied=after_type - final_damage,
    )


def calculate_heal(current_hp: int, max_hp: int, amount: int) -> int:
    """HP actually restored by a heal: never past max hp, never negative."""
    return max(0, min(max_hp - current_hp, amount))


def calculate_status_effect_damage(effect: StatusEffect, max_hp: int, minimum: int = 1) -> int:
    """
    Damage dealt by one tick of a damage-over-time effect.

    Poison deals its value, burning one and a half times its value,
    bleeding a percentage of max hp. Other effects deal nothing.
    """
    if effect.type is StatusEffectType.POISONED:
        return effect.value
    if effect.type is StatusEffectType.BURNING:
        return math.floor(effect.value * 1.5)
    if effect.type is StatusEffectType.BLEEDING:
        return max(minimum, math.floor(max_hp * (effect.value / 100)))
    return 0


def calculate_flee_chance(
    actor_speed: int,
    enemy_speeds: Iterable[int],
    config: CombatConfig = DEFAULT_CONFIG,
) -> float:
    """
    Flee chance (0-100) from the actor's speed against the average enemy.

    With no enemies standing the speed difference is zero.
    """
    speeds = list(enemy_speeds)
    average = sum(speeds) / len(speeds) if speeds else actor_speed
    chance = config.base_flee_chance + (actor_speed - average) * config.flee_speed_bonus
    return max(config.min_flee_chance, min(config.max_flee_chance, chance))
