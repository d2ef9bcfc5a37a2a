"""Static content storage."""

from skirmish_engine.resources.database import Database

__all__ = ["Database"]
