"""
Personas module exceptions.
"""

from shared.exceptions import NotFoundError, ConflictError


class PersonaNotFoundError(NotFoundError):
    """Raised when a persona is not found."""

    def __init__(self, persona_id: str):
        super().__init__(
            f"Persona not found: {persona_id}",
            code="PERSONA_NOT_FOUND",
            details={"persona_id": persona_id},
        )


class PersonaInUseError(ConflictError):
    """Raised when deleting a persona that debates still reference."""

    def __init__(self, persona_id: str):
        super().__init__(
            f"Cannot delete persona used in debates: {persona_id}",
            code="PERSONA_IN_USE",
            details={"persona_id": persona_id},
        )
