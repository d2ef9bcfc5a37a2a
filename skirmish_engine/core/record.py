"""
Record base class for immutable, data-only values.

Records are frozen value objects with NO mutating logic.
State transitions build new records instead of editing old ones. This makes:
- Replays deterministic
- Serialization trivial
- Testing easier

Usage:
    class Health(Record):
        current: int
        maximum: int

    wounded = health.evolve(current=health.current - 5)
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

R = TypeVar("R", bound="Record")


class Record(BaseModel):
    """
    Base class for all immutable records.

    Records are Pydantic models used for:
    - Automatic validation
    - JSON serialization
    - Type hints
    - Default values

    IMPORTANT: Records are frozen. Use evolve() to derive a changed copy.
    """

    model_config = ConfigDict(
        # Instances never change after construction
        frozen=True,
        # Reject unknown fields so content typos surface early
        extra='forbid',
    )

    # Class variable: record type name (used in log and error messages)
    _type_name: ClassVar[str] = ""

    @classmethod
    def get_type_name(cls) -> str:
        """Get the record type name."""
        return cls._type_name or cls.__name__

    def evolve(self: R, **changes: Any) -> R:
        """
        Create a validated copy with some fields replaced.

        Unlike model_copy(update=...), the result goes through the
        model's validators, so invariants hold on every derived value.
        """
        data = dict(self)
        data.update(changes)
        return type(self).model_validate(data)
