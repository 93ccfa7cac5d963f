"""
Debates service implementation.

Creates debates, serves cached read models, and applies pause/resume/skip
requests. Advancing a debate is the orchestrator's job; this service only
changes status and schedules ticks.
"""

import logging
from collections import Counter
from typing import AsyncIterator, Optional

from shared.cache import (
    DEBATE_LIST_KEY,
    DEBATE_LIST_PATTERN,
    ICache,
    debate_arguments_key,
    debate_key,
    invalidate_debate,
)
from shared.config import Settings
from shared.exceptions import ValidationError
from modules.personas.exceptions import PersonaNotFoundError
from modules.personas.models import Persona, PersonaDescriptor
from modules.storage.interfaces import IStorage

from .broadcast import BroadcastChannel
from .exceptions import (
    DebateAlreadyFinishedError,
    DebateNotActiveError,
    DebateNotFoundError,
    DebateNotPausedError,
)
from .interfaces import IDebateService
from .models import (
    ArgumentWithVotes,
    ControlResponse,
    CreateDebateRequest,
    Debate,
    DebateDetail,
    DebateEvent,
    DebateSortOrder,
    DebateStatus,
)
from .orchestrator import DebateOrchestrator

logger = logging.getLogger(__name__)


class DebateService(IDebateService):
    """
    Debate service over the storage interface.

    Implements IDebateService protocol.
    """

    def __init__(
        self,
        storage: IStorage,
        cache: ICache,
        broadcaster: BroadcastChannel,
        orchestrator: DebateOrchestrator,
        settings: Settings,
    ):
        self._storage = storage
        self._cache = cache
        self._broadcaster = broadcaster
        self._orchestrator = orchestrator
        self._settings = settings

    # -------------------------------------------------------------------------
    # Creation and reads
    # -------------------------------------------------------------------------

    async def create_debate(self, request: CreateDebateRequest) -> DebateDetail:
        """Create the debate, then schedule its first tick."""
        total_rounds = request.total_rounds or self._settings.default_total_rounds
        if total_rounds > self._settings.max_total_rounds:
            raise ValidationError(
                f"total_rounds must be at most {self._settings.max_total_rounds}",
                code="TOO_MANY_ROUNDS",
                details={
                    "total_rounds": total_rounds,
                    "max_total_rounds": self._settings.max_total_rounds,
                },
            )

        persona_a = await self._resolve_persona(request.persona_a)
        persona_b = await self._resolve_persona(request.persona_b)

        debate = await self._storage.create_debate(
            topic=request.topic.strip(),
            persona_a_id=persona_a.id,
            persona_b_id=persona_b.id,
            total_rounds=total_rounds,
        )
        await self._cache.delete_pattern(DEBATE_LIST_PATTERN)

        self._orchestrator.schedule(debate.id, self._settings.initial_tick_delay)
        logger.info(
            "Created debate %s (%s vs %s, %d rounds)",
            debate.id,
            persona_a.name,
            persona_b.name,
            total_rounds,
        )
        return DebateDetail(
            **debate.model_dump(),
            persona_a=persona_a,
            persona_b=persona_b,
        )

    async def get_debate(self, debate_id: str) -> DebateDetail:
        cached = await self._cache.get(debate_key(debate_id))
        if cached is not None:
            detail = DebateDetail.model_validate(cached)
        else:
            debate = await self._require_debate(debate_id)
            arguments = await self._storage.list_arguments(debate_id)
            detail = await self._build_detail(debate, len(arguments))
            await self._cache.set(
                debate_key(debate_id),
                detail.model_dump(mode="json"),
                self._settings.debate_cache_ttl,
            )
        return self._with_spectators(detail)

    async def list_debates(
        self,
        search: Optional[str] = None,
        status: Optional[DebateStatus] = None,
        sort_by: DebateSortOrder = DebateSortOrder.NEWEST,
    ) -> list[DebateDetail]:
        debates = await self._load_debate_list()

        if status is not None:
            debates = [d for d in debates if d.status == status]

        if search:
            needle = search.strip().lower()
            debates = [
                d for d in debates
                if needle in d.topic.lower()
                or needle in d.persona_a.name.lower()
                or needle in d.persona_b.name.lower()
            ]

        if sort_by == DebateSortOrder.OLDEST:
            debates.sort(key=lambda d: d.created_at)
        elif sort_by == DebateSortOrder.ARGUMENTS:
            debates.sort(key=lambda d: (d.argument_count, d.created_at), reverse=True)
        else:
            debates.sort(key=lambda d: d.created_at, reverse=True)

        return [self._with_spectators(d) for d in debates]

    async def list_arguments(self, debate_id: str) -> list[ArgumentWithVotes]:
        debate = await self._require_debate(debate_id)

        cached = await self._cache.get(debate_arguments_key(debate_id))
        if cached is not None:
            return [ArgumentWithVotes.model_validate(item) for item in cached]

        personas = await self._debate_personas(debate)
        arguments = await self._storage.list_arguments(debate_id)
        votes = Counter(v.argument_id for v in await self._storage.list_votes(debate_id))

        result = [
            ArgumentWithVotes(
                **argument.model_dump(),
                persona=personas[argument.persona_id],
                vote_count=votes[argument.id],
            )
            for argument in arguments
            if argument.persona_id in personas
        ]
        await self._cache.set(
            debate_arguments_key(debate_id),
            [item.model_dump(mode="json") for item in result],
            self._settings.arguments_cache_ttl,
        )
        return result

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    async def pause_debate(self, debate_id: str) -> ControlResponse:
        debate = await self._require_debate(debate_id)
        if debate.status != DebateStatus.ACTIVE:
            raise DebateNotActiveError(debate_id, debate.status.value)

        await self._set_status(debate_id, DebateStatus.PAUSED)
        logger.info("Paused debate %s", debate_id)
        return ControlResponse(
            debate_id=debate_id,
            status=DebateStatus.PAUSED,
            message="Debate paused",
        )

    async def resume_debate(self, debate_id: str) -> ControlResponse:
        debate = await self._require_debate(debate_id)
        if debate.status != DebateStatus.PAUSED:
            raise DebateNotPausedError(debate_id, debate.status.value)

        await self._set_status(debate_id, DebateStatus.ACTIVE)
        self._orchestrator.schedule(debate_id, self._settings.resume_tick_delay)
        logger.info("Resumed debate %s", debate_id)
        return ControlResponse(
            debate_id=debate_id,
            status=DebateStatus.ACTIVE,
            message="Debate resumed",
        )

    async def skip_to_judgment(self, debate_id: str) -> ControlResponse:
        """
        Move the debate to its final round.

        Missing final-round arguments are still generated before the judge
        runs. A paused debate is reactivated.
        """
        debate = await self._require_debate(debate_id)
        if debate.is_terminal:
            raise DebateAlreadyFinishedError(debate_id, debate.status.value)

        fields: dict = {"status": DebateStatus.ACTIVE}
        if debate.current_round < debate.total_rounds:
            fields["current_round"] = debate.total_rounds
        await self._storage.update_debate(debate_id, **fields)
        await invalidate_debate(self._cache, debate_id, include_arguments=False)

        if debate.status == DebateStatus.PAUSED:
            self._broadcaster.publish(
                debate_id, DebateEvent.status_changed(debate_id, DebateStatus.ACTIVE)
            )

        self._orchestrator.schedule(debate_id, self._settings.skip_tick_delay)
        logger.info(
            "Skipping debate %s to judgment from round %d/%d",
            debate_id,
            debate.current_round,
            debate.total_rounds,
        )
        return ControlResponse(
            debate_id=debate_id,
            status=DebateStatus.ACTIVE,
            message="Skipping to judgment",
        )

    async def stream_events(self, debate_id: str) -> AsyncIterator[DebateEvent]:
        await self._require_debate(debate_id)
        return self._broadcaster.stream(debate_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _require_debate(self, debate_id: str) -> Debate:
        debate = await self._storage.get_debate(debate_id)
        if debate is None:
            raise DebateNotFoundError(debate_id)
        return debate

    async def _resolve_persona(self, descriptor: PersonaDescriptor) -> Persona:
        if descriptor.id:
            persona = await self._storage.get_persona(descriptor.id)
            if persona is None:
                raise PersonaNotFoundError(descriptor.id)
            return persona
        return await self._storage.create_persona(
            descriptor.name.strip(),
            descriptor.tone.strip(),
            descriptor.bias.strip(),
        )

    async def _debate_personas(self, debate: Debate) -> dict[str, Persona]:
        personas = {}
        for persona_id in (debate.persona_a_id, debate.persona_b_id):
            persona = await self._storage.get_persona(persona_id)
            if persona is None:
                raise PersonaNotFoundError(persona_id)
            personas[persona_id] = persona
        return personas

    async def _build_detail(self, debate: Debate, argument_count: int) -> DebateDetail:
        personas = await self._debate_personas(debate)
        return DebateDetail(
            **debate.model_dump(),
            persona_a=personas[debate.persona_a_id],
            persona_b=personas[debate.persona_b_id],
            argument_count=argument_count,
        )

    async def _load_debate_list(self) -> list[DebateDetail]:
        cached = await self._cache.get(DEBATE_LIST_KEY)
        if cached is not None:
            return [DebateDetail.model_validate(item) for item in cached]

        personas = {p.id: p for p in await self._storage.list_personas()}
        counts = Counter(a.debate_id for a in await self._storage.list_all_arguments())

        debates = []
        for debate in await self._storage.list_debates():
            persona_a = personas.get(debate.persona_a_id)
            persona_b = personas.get(debate.persona_b_id)
            if persona_a is None or persona_b is None:
                logger.warning("Skipping debate %s with a missing persona", debate.id)
                continue
            debates.append(DebateDetail(
                **debate.model_dump(),
                persona_a=persona_a,
                persona_b=persona_b,
                argument_count=counts[debate.id],
            ))

        await self._cache.set(
            DEBATE_LIST_KEY,
            [d.model_dump(mode="json") for d in debates],
            self._settings.debate_list_cache_ttl,
        )
        return debates

    async def _set_status(self, debate_id: str, status: DebateStatus) -> None:
        await self._storage.update_debate(debate_id, status=status)
        await invalidate_debate(self._cache, debate_id, include_arguments=False)
        self._broadcaster.publish(debate_id, DebateEvent.status_changed(debate_id, status))

    def _with_spectators(self, detail: DebateDetail) -> DebateDetail:
        return detail.model_copy(
            update={"spectator_count": self._broadcaster.subscriber_count(detail.id)}
        )
