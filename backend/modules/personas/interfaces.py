"""
Personas module interface.
"""

from typing import Protocol, runtime_checkable

from .models import (
    CreatePersonaRequest,
    Persona,
    PersonaStats,
    PersonaWithStats,
    UpdatePersonaRequest,
)


@runtime_checkable
class IPersonaService(Protocol):
    """
    Interface for persona management.

    Personas are shared across debates, so a persona that any debate
    references cannot be deleted.
    """

    async def list_personas(self) -> list[PersonaWithStats]:
        """List personas newest first, each with its statistics."""
        ...

    async def get_persona(self, persona_id: str) -> Persona:
        """
        Raises:
            PersonaNotFoundError: If the persona does not exist
        """
        ...

    async def create_persona(self, request: CreatePersonaRequest) -> Persona:
        ...

    async def update_persona(
        self,
        persona_id: str,
        request: UpdatePersonaRequest,
    ) -> Persona:
        """
        Apply a partial update.

        Raises:
            PersonaNotFoundError: If the persona does not exist
        """
        ...

    async def delete_persona(self, persona_id: str) -> None:
        """
        Delete an unreferenced persona.

        Raises:
            PersonaNotFoundError: If the persona does not exist
            PersonaInUseError: If any debate references the persona
        """
        ...

    async def get_stats(self, persona_id: str) -> PersonaStats:
        """
        Debates, wins, arguments and votes received for one persona.

        Raises:
            PersonaNotFoundError: If the persona does not exist
        """
        ...
