"""Exceptions raised by the recipe search and chat services.

Two failure kinds exist: the call to the model failed, or the model replied
with text that does not have the expected shape. ``str(exc)`` is the message
shown to the user.
"""

from typing import Optional


class SpiceRouteError(Exception):
    """Base exception for recipe search and chat."""


class GenerationError(SpiceRouteError):
    """Raised when the model call itself fails (network, HTTP or SDK error)."""

    def __init__(self, message: str = "Failed to generate recipe", cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class ResponseFormatError(SpiceRouteError):
    """Raised when the reply text cannot be turned into recipe data."""

    def __init__(self, message: str = "Failed to parse recipe data", text: Optional[str] = None):
        self.text = text
        super().__init__(message)
