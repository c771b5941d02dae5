"""Exception hierarchy for learnkit.

Malformed generated content never surfaces as one of these: the extractor
absorbs it into a fallback value. These errors cover configuration problems,
caller mistakes and transport failures.
"""

from typing import Any, Optional


class LearnkitError(Exception):
    """Base error carrying a message and optional structured details."""

    def __init__(self, message: str = "", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(LearnkitError):
    """Invalid environment or constructor configuration."""


class ValidationError(LearnkitError):
    """Caller supplied input that cannot be used."""


class InvalidInputError(ValidationError):
    """Blank or otherwise unusable input."""


class InvalidAnswerError(ValidationError):
    """Answer index outside the options of the current question."""


class BackendError(LearnkitError):
    """Transport level failure talking to the generative backend."""


class BackendHTTPError(BackendError):
    """Backend answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str = "",
        status_code: int = 0,
        details: Optional[dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class BackendResponseError(BackendError):
    """Backend response body is not the expected JSON envelope."""
