"""
Combat state persistence - mid-battle save and restore.

Provides:
- Lossless JSON round-trip of a CombatState
- Format versioning
- File helpers
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from skirmish_engine.core.errors import StateLoadError
from skirmish_engine.core.record import Record
from skirmish.components import CombatState

logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = "1.0"


class CombatSnapshot(Record):
    """Versioned envelope around a saved combat state."""
    version: str = STATE_FORMAT_VERSION
    state: CombatState


def dump_state(state: CombatState, indent: int | None = None) -> str:
    """Serialize a combat state to JSON."""
    return CombatSnapshot(state=state).model_dump_json(indent=indent)


def load_state(text: str | bytes) -> CombatState:
    """
    Restore a combat state from JSON produced by dump_state().

    Raises:
        StateLoadError: If the text is not a valid snapshot of this version
    """
    try:
        snapshot = CombatSnapshot.model_validate_json(text)
    except ValidationError as e:
        raise StateLoadError(f"Invalid combat snapshot: {e}") from e

    if snapshot.version != STATE_FORMAT_VERSION:
        raise StateLoadError(
            f"Unsupported snapshot version {snapshot.version} "
            f"(expected {STATE_FORMAT_VERSION})"
        )
    return snapshot.state


def save_state_file(state: CombatState, path: Path | str) -> Path:
    """Write a combat state to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_state(state, indent=2), encoding='utf-8')
    logger.info(f"Saved combat {state.id} (round {state.round}) to {path}")
    return path


def load_state_file(path: Path | str) -> CombatState:
    """
    Read a combat state from disk.

    Raises:
        StateLoadError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise StateLoadError(f"Cannot read combat snapshot {path}: {e}") from e

    state = load_state(text)
    logger.info(f"Loaded combat {state.id} (round {state.round}) from {path}")
    return state
