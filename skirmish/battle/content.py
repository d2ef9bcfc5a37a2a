"""
Combat content - enemy and encounter definitions loaded from JSON.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from skirmish_engine.core.errors import ContentLookupError, ContentValidationError
from skirmish_engine.resources.database import Database
from skirmish.components import CombatEncounter, EnemyDefinition

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "data" / "schemas"

ENEMIES = "enemies"
ENCOUNTERS = "encounters"


class ContentDatabase:
    """
    Enemy and encounter lookup backed by a schema-validated Database.

    Usage:
        content = ContentDatabase("game/data")
        content.load_all()
        encounter = content.require_encounter("bandit_ambush")
        state = initialize_combat(encounter, context, content.get_enemy)
    """

    def __init__(
        self,
        data_path: Path | str,
        schema_path: Optional[Path | str] = None,
        strict: bool = False,
    ):
        self._database = Database(
            data_path,
            categories={
                ENEMIES: "enemy.schema.json",
                ENCOUNTERS: "encounter.schema.json",
            },
            schema_path=schema_path or SCHEMA_DIR,
            strict=strict,
        )
        self._strict = strict
        self.enemies: dict[str, EnemyDefinition] = {}
        self.encounters: dict[str, CombatEncounter] = {}

    def load_all(self) -> None:
        """Load and parse all enemy and encounter records."""
        self._database.load_all()
        self.enemies = self._parse(ENEMIES, EnemyDefinition)
        self.encounters = self._parse(ENCOUNTERS, CombatEncounter)

        for encounter in self.encounters.values():
            for entry in encounter.enemies:
                if entry.enemy_id not in self.enemies:
                    logger.warning(
                        f"Encounter '{encounter.id}' references unknown enemy '{entry.enemy_id}'"
                    )

    def get_enemy(self, enemy_id: str) -> Optional[EnemyDefinition]:
        """Get an enemy definition; usable as the combat lookup callable."""
        return self.enemies.get(enemy_id)

    def get_encounter(self, encounter_id: str) -> Optional[CombatEncounter]:
        """Get an encounter definition."""
        return self.encounters.get(encounter_id)

    def require_encounter(self, encounter_id: str) -> CombatEncounter:
        """
        Get an encounter definition that must exist.

        Raises:
            ContentLookupError: If the encounter is unknown
        """
        encounter = self.get_encounter(encounter_id)
        if encounter is None:
            raise ContentLookupError(encounter_id, "encounter lookup")
        return encounter

    def _parse(self, category: str, model: type) -> dict:
        """Turn raw records into typed definitions, skipping bad ones."""
        parsed = {}
        for record_id, raw in self._database.records(category).items():
            try:
                parsed[record_id] = model.model_validate(raw)
            except ValidationError as e:
                message = f"Invalid {category} record '{record_id}': {e}"
                if self._strict:
                    raise ContentValidationError(message) from e
                logger.error(message)
        return parsed
