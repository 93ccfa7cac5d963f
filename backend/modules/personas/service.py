"""
Persona service implementation.

Statistics are derived from debates, arguments and votes on every read.
"""

import logging
from collections import defaultdict

from shared.cache import DEBATE_LIST_PATTERN, ICache, debate_key
from modules.storage.interfaces import IStorage

from .exceptions import PersonaInUseError, PersonaNotFoundError
from .interfaces import IPersonaService
from .models import (
    CreatePersonaRequest,
    Persona,
    PersonaStats,
    PersonaWithStats,
    UpdatePersonaRequest,
)

logger = logging.getLogger(__name__)


class PersonaService(IPersonaService):
    """Persona CRUD and statistics over the storage interface."""

    def __init__(self, storage: IStorage, cache: ICache):
        self._storage = storage
        self._cache = cache

    async def list_personas(self) -> list[PersonaWithStats]:
        personas = await self._storage.list_personas()
        stats = await self._compute_stats()
        return [
            PersonaWithStats(
                **persona.model_dump(),
                **stats.get(persona.id, PersonaStats()).model_dump(),
            )
            for persona in personas
        ]

    async def get_persona(self, persona_id: str) -> Persona:
        persona = await self._storage.get_persona(persona_id)
        if persona is None:
            raise PersonaNotFoundError(persona_id)
        return persona

    async def create_persona(self, request: CreatePersonaRequest) -> Persona:
        persona = await self._storage.create_persona(
            request.name.strip(),
            request.tone.strip(),
            request.bias.strip(),
        )
        logger.info("Created persona %s (%s)", persona.id, persona.name)
        return persona

    async def update_persona(
        self,
        persona_id: str,
        request: UpdatePersonaRequest,
    ) -> Persona:
        updates = {k: v.strip() for k, v in request.model_dump(exclude_none=True).items()}
        if not updates:
            return await self.get_persona(persona_id)

        persona = await self._storage.update_persona(persona_id, updates)
        if persona is None:
            raise PersonaNotFoundError(persona_id)

        # Cached debate views embed persona details
        await self._cache.delete_pattern(debate_key("*"))
        await self._cache.delete_pattern(DEBATE_LIST_PATTERN)
        return persona

    async def delete_persona(self, persona_id: str) -> None:
        await self.get_persona(persona_id)
        if not await self._storage.delete_persona(persona_id):
            raise PersonaInUseError(persona_id)
        logger.info("Deleted persona %s", persona_id)

    async def get_stats(self, persona_id: str) -> PersonaStats:
        await self.get_persona(persona_id)
        stats = await self._compute_stats()
        return stats.get(persona_id, PersonaStats())

    async def _compute_stats(self) -> dict[str, PersonaStats]:
        debates = await self._storage.list_debates()
        arguments = await self._storage.list_all_arguments()
        votes = await self._storage.list_all_votes()

        stats: dict[str, PersonaStats] = defaultdict(PersonaStats)
        for debate in debates:
            for persona_id in {debate.persona_a_id, debate.persona_b_id}:
                stats[persona_id].total_debates += 1
            if debate.winner_id:
                stats[debate.winner_id].wins += 1

        author = {}
        for argument in arguments:
            author[argument.id] = argument.persona_id
            stats[argument.persona_id].total_arguments += 1

        for vote in votes:
            persona_id = author.get(vote.argument_id)
            if persona_id is not None:
                stats[persona_id].total_votes_received += 1

        return dict(stats)
