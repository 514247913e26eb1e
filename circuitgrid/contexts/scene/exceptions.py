"""Custom exceptions for the scene context."""

from typing import Any, Optional


class SceneValidationError(ValueError):
    """
    Exception raised when a scene or a piece of form input is invalid.

    Raised before any rendering or filesystem work happens.

    Attributes:
        message: Human-readable description shown to the user
        field: Name of the offending field (e.g., 'width', 'components[2].x')
        value: The rejected value
    """

    kind = "validation"

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(message)
