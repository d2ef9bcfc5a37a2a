"""Engine-level exceptions.

Gameplay rejections (missed attacks, illegal actions) are never raised;
they come back as results. These exceptions signal environment problems.
"""


class SkirmishError(Exception):
    """Base class for all engine errors."""


class ContentLookupError(SkirmishError):
    """Raised when content referenced by an encounter cannot be resolved."""

    def __init__(self, content_id: str, context: str | None = None) -> None:
        self.content_id = content_id
        self.context = context
        message = f"Unknown content id '{content_id}'"
        if context:
            message += f" (referenced by {context})"
        super().__init__(message)


class ContentValidationError(SkirmishError):
    """Raised when a content record does not satisfy its schema."""


class StateLoadError(SkirmishError):
    """Raised when a saved combat state cannot be restored."""
