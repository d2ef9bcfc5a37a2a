"""
Combat tuning configuration.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import Field, model_validator

from skirmish_engine.core.record import Record

logger = logging.getLogger(__name__)


class CombatConfig(Record):
    """
    Tuning constants for combat resolution.

    Percentages use a 0-100 scale, matching accuracy/evasion/crit stats.
    """
    # Hit chance clamp
    min_hit_chance: float = 5.0
    max_hit_chance: float = 95.0

    # Damage
    minimum_damage: int = Field(default=1, ge=0)
    damage_variance: float = Field(default=0.1, ge=0.0, lt=1.0)
    # Damage lost at full fatigue (fatigue 100)
    max_fatigue_penalty: float = Field(default=0.3, ge=0.0, le=1.0)

    # Defend stance
    defend_turns: int = Field(default=1, ge=1)
    defend_reduction: int = Field(default=50, ge=0, le=100)

    # Fleeing
    base_flee_chance: float = 40.0
    flee_speed_bonus: float = 2.0
    min_flee_chance: float = 10.0
    max_flee_chance: float = 90.0

    # Enemy stat derivation
    enemy_base_accuracy: float = 70.0
    enemy_crit_chance: float = 5.0
    enemy_crit_multiplier: float = 1.5

    # Log
    max_log_entries: int = Field(default=50, ge=1)

    @model_validator(mode="after")
    def _check_ranges(self) -> CombatConfig:
        if self.min_hit_chance > self.max_hit_chance:
            raise ValueError("min_hit_chance must not exceed max_hit_chance")
        if self.min_flee_chance > self.max_flee_chance:
            raise ValueError("min_flee_chance must not exceed max_flee_chance")
        return self

    @classmethod
    def from_file(cls, path: Path | str) -> CombatConfig:
        """
        Load overrides from a JSON file.

        Keys not present keep their defaults.
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        config = cls.model_validate(data)
        logger.info(f"Loaded combat config from {path}")
        return config


DEFAULT_CONFIG = CombatConfig()
