"""
Content Database.

Handles loading and validation of static game data (enemies, encounters, etc.).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import jsonschema

from skirmish_engine.core.errors import ContentValidationError


class Database:
    """
    Central storage for static game data.

    Layout on disk:
        <data_path>/database/<category>/*.json   records (object or list)
        <schema_path>/*.schema.json              JSON schemas

    Records failing validation are logged and skipped, unless ``strict``
    is set, in which case the first failure raises ContentValidationError.
    """

    def __init__(
        self,
        data_path: Path | str,
        categories: Mapping[str, str],
        schema_path: Optional[Path | str] = None,
        strict: bool = False,
    ):
        self._data_path = Path(data_path)
        self._schema_path = Path(schema_path) if schema_path else self._data_path / "schemas"
        self._categories = dict(categories)
        self._strict = strict
        self._schemas: dict[str, Any] = {}
        self._records: dict[str, dict[str, Any]] = {name: {} for name in self._categories}

        self.logger = logging.getLogger(__name__)

    def load_all(self) -> None:
        """Load all categories from disk."""
        self._load_schemas()

        for category, schema_name in self._categories.items():
            self._records[category] = self._load_category(category, schema_name)

        summary = ", ".join(
            f"{len(records)} {category}" for category, records in self._records.items()
        )
        self.logger.info(f"Loaded {summary}.")

    def get(self, category: str, record_id: str) -> dict[str, Any] | None:
        """Get a raw record by category and id."""
        return self._records.get(category, {}).get(record_id)

    def records(self, category: str) -> dict[str, dict[str, Any]]:
        """Get all raw records of a category, keyed by id."""
        return dict(self._records.get(category, {}))

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        if not self._schema_path.exists():
            self.logger.warning(f"Schema directory not found: {self._schema_path}")
            return

        for schema_file in self._schema_path.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")

    def _load_category(self, folder: str, schema_name: str) -> dict[str, Any]:
        """Load all JSON files in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, Any] = {}

        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return data_store

        schema = self._schemas.get(schema_name)
        if not schema:
            self.logger.warning(f"No schema found for {folder} ({schema_name})")

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self._reject(f"Failed to load {file_path}: {e}")
                continue

            items = data if isinstance(data, list) else [data]
            for item in items:
                if not isinstance(item, dict) or 'id' not in item:
                    self._reject(f"Record without id in {file_path}")
                    continue

                if schema:
                    try:
                        jsonschema.validate(instance=item, schema=schema)
                    except jsonschema.ValidationError as e:
                        self._reject(f"Validation error in {file_path}: {e.message}")
                        continue

                if item['id'] in data_store:
                    self.logger.warning(f"Duplicate {folder} id '{item['id']}' in {file_path}")
                data_store[item['id']] = item

        return data_store

    def _reject(self, message: str) -> None:
        """Log a bad record, or raise when loading strictly."""
        if self._strict:
            raise ContentValidationError(message)
        self.logger.error(message)
