"""
Error taxonomy for the Debatrix backend.

Feature modules raise subclasses of the categories below (for example
``DebateNotFoundError`` is a ``NotFoundError`` and ``DuplicateVoteError`` a
``ConflictError``). The API layer picks the HTTP status from the category
and renders ``to_dict()`` as the response body.
"""

from typing import Optional, Any


class DebatrixError(Exception):
    """
    Root of the taxonomy.

    ``code`` is a stable machine-readable identifier for clients and
    defaults to the class name. ``details`` carries the ids involved.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Body of an error response: ``{"error", "message", "details"}``."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(DebatrixError):
    """A debate, persona or argument id that does not resolve."""


class ValidationError(DebatrixError):
    """Request passed schema checks but breaks a business rule, e.g. too many rounds."""


class InvalidTransitionError(DebatrixError):
    """Control or vote not allowed in the debate's current status."""


class ConflictError(DebatrixError):
    """Write collides with stored data: a repeat vote or deleting a persona in use."""


class ExternalServiceError(DebatrixError):
    """
    The language model (or another upstream) failed.

    ``service`` names the upstream and is copied into ``details``.
    """

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
