"""
Core engine module.

Exports:
- Record: Immutable record base
- EventBus, Event: Event system
- RollSource: Seedable roll generator
- SkirmishError and subclasses: Engine errors
"""

from skirmish_engine.core.record import Record
from skirmish_engine.core.events import EventBus, Event, EventHandler
from skirmish_engine.core.rng import RollSource
from skirmish_engine.core.errors import (
    SkirmishError,
    ContentLookupError,
    ContentValidationError,
    StateLoadError,
)

__all__ = [
    # Records
    "Record",
    # Events
    "EventBus",
    "Event",
    "EventHandler",
    # Randomness
    "RollSource",
    # Errors
    "SkirmishError",
    "ContentLookupError",
    "ContentValidationError",
    "StateLoadError",
]
