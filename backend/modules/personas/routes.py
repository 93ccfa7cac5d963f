"""
Persona API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_persona_service

from .interfaces import IPersonaService
from .models import (
    CreatePersonaRequest,
    Persona,
    PersonaStats,
    PersonaWithStats,
    UpdatePersonaRequest,
)

router = APIRouter()


@router.get("", response_model=list[PersonaWithStats])
async def list_personas(
    service: IPersonaService = Depends(get_persona_service),
) -> list[PersonaWithStats]:
    """List all personas with their debate statistics."""
    return await service.list_personas()


@router.post("", response_model=Persona, status_code=201)
async def create_persona(
    request: CreatePersonaRequest,
    service: IPersonaService = Depends(get_persona_service),
) -> Persona:
    return await service.create_persona(request)


@router.get("/{persona_id}", response_model=Persona)
async def get_persona(
    persona_id: str,
    service: IPersonaService = Depends(get_persona_service),
) -> Persona:
    return await service.get_persona(persona_id)


@router.patch("/{persona_id}", response_model=Persona)
async def update_persona(
    persona_id: str,
    request: UpdatePersonaRequest,
    service: IPersonaService = Depends(get_persona_service),
) -> Persona:
    """Update a persona's name, tone or bias. Omitted fields are unchanged."""
    return await service.update_persona(persona_id, request)


@router.delete("/{persona_id}", status_code=204)
async def delete_persona(
    persona_id: str,
    service: IPersonaService = Depends(get_persona_service),
) -> None:
    """
    Delete a persona.

    Personas that take part in any debate cannot be deleted (409).
    """
    await service.delete_persona(persona_id)


@router.get("/{persona_id}/stats", response_model=PersonaStats)
async def get_persona_stats(
    persona_id: str,
    service: IPersonaService = Depends(get_persona_service),
) -> PersonaStats:
    return await service.get_stats(persona_id)
