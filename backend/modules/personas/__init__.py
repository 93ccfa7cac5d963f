"""
Personas module.

Manages the debating identities that arguments are generated for.

Public API:
- IPersonaService: Interface for persona management
- Persona, PersonaWithStats, PersonaStats: Persona models
- PersonaDescriptor: Reference-or-definition used when creating debates
- PersonaNotFoundError, PersonaInUseError: Persona errors
"""

from .interfaces import IPersonaService
from .models import (
    Persona,
    PersonaDescriptor,
    PersonaStats,
    PersonaWithStats,
    CreatePersonaRequest,
    UpdatePersonaRequest,
)
from .exceptions import PersonaNotFoundError, PersonaInUseError

__all__ = [
    "IPersonaService",
    "Persona",
    "PersonaDescriptor",
    "PersonaStats",
    "PersonaWithStats",
    "CreatePersonaRequest",
    "UpdatePersonaRequest",
    "PersonaNotFoundError",
    "PersonaInUseError",
]
