"""
In-memory storage backend.

Used for tests and whenever Supabase is not configured. Records live in dicts
keyed by id; list ordering comes from each record's ``created_at``, which is
kept strictly increasing so records created in the same microsecond still
sort in creation order.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from modules.debates.models import Argument, Debate, DebateStatus
from modules.personas.models import Persona
from modules.votes.exceptions import DuplicateVoteError
from modules.votes.models import Vote


PERSONA_FIELDS = frozenset({"name", "tone", "bias"})
DEBATE_FIELDS = frozenset({"status", "current_round"})


class InMemoryStorage:
    """Dict-backed implementation of IStorage."""

    name = "memory"

    def __init__(self) -> None:
        self._personas: dict[str, Persona] = {}
        self._debates: dict[str, Debate] = {}
        self._arguments: dict[str, Argument] = {}
        self._votes: dict[str, Vote] = {}
        self._vote_keys: set[tuple[str, str]] = set()
        self._last_timestamp = datetime.min.replace(tzinfo=timezone.utc)

    def _now(self) -> datetime:
        now = datetime.now(timezone.utc)
        if now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    # -------------------------------------------------------------------------
    # Personas
    # -------------------------------------------------------------------------

    async def create_persona(self, name: str, tone: str, bias: str) -> Persona:
        persona = Persona(
            id=self._new_id(),
            name=name,
            tone=tone,
            bias=bias,
            created_at=self._now(),
        )
        self._personas[persona.id] = persona
        return persona

    async def get_persona(self, persona_id: str) -> Optional[Persona]:
        return self._personas.get(persona_id)

    async def list_personas(self) -> list[Persona]:
        return sorted(self._personas.values(), key=lambda p: p.created_at, reverse=True)

    async def update_persona(
        self,
        persona_id: str,
        updates: dict[str, Any],
    ) -> Optional[Persona]:
        persona = self._personas.get(persona_id)
        if persona is None:
            return None
        changes = {k: v for k, v in updates.items() if k in PERSONA_FIELDS and v is not None}
        updated = persona.model_copy(update=changes)
        self._personas[persona_id] = updated
        return updated

    async def delete_persona(self, persona_id: str) -> bool:
        in_use = any(
            persona_id in (d.persona_a_id, d.persona_b_id, d.winner_id)
            for d in self._debates.values()
        )
        if in_use:
            return False
        return self._personas.pop(persona_id, None) is not None

    # -------------------------------------------------------------------------
    # Debates
    # -------------------------------------------------------------------------

    async def create_debate(
        self,
        topic: str,
        persona_a_id: str,
        persona_b_id: str,
        total_rounds: int,
    ) -> Debate:
        debate = Debate(
            id=self._new_id(),
            topic=topic,
            persona_a_id=persona_a_id,
            persona_b_id=persona_b_id,
            status=DebateStatus.ACTIVE,
            total_rounds=total_rounds,
            current_round=1,
            created_at=self._now(),
        )
        self._debates[debate.id] = debate
        return debate

    async def get_debate(self, debate_id: str) -> Optional[Debate]:
        return self._debates.get(debate_id)

    async def list_debates(self) -> list[Debate]:
        return sorted(self._debates.values(), key=lambda d: d.created_at, reverse=True)

    async def update_debate(self, debate_id: str, **fields: Any) -> Optional[Debate]:
        debate = self._debates.get(debate_id)
        if debate is None:
            return None
        unknown = set(fields) - DEBATE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update debate fields: {sorted(unknown)}")
        updated = debate.model_copy(update=fields)
        self._debates[debate_id] = updated
        return updated

    async def set_debate_winner(
        self,
        debate_id: str,
        winner_id: str,
        judgment_summary: str,
    ) -> None:
        debate = self._debates.get(debate_id)
        if debate is None:
            return
        self._debates[debate_id] = debate.model_copy(
            update={
                "winner_id": winner_id,
                "judgment_summary": judgment_summary,
                "status": DebateStatus.COMPLETED,
            }
        )

    # -------------------------------------------------------------------------
    # Arguments
    # -------------------------------------------------------------------------

    async def create_argument(
        self,
        debate_id: str,
        persona_id: str,
        content: str,
        round_number: int,
    ) -> Argument:
        argument = Argument(
            id=self._new_id(),
            debate_id=debate_id,
            persona_id=persona_id,
            content=content,
            round_number=round_number,
            created_at=self._now(),
        )
        self._arguments[argument.id] = argument
        return argument

    async def list_arguments(self, debate_id: str) -> list[Argument]:
        return sorted(
            (a for a in self._arguments.values() if a.debate_id == debate_id),
            key=lambda a: a.created_at,
        )

    async def list_all_arguments(self) -> list[Argument]:
        return sorted(self._arguments.values(), key=lambda a: a.created_at)

    # -------------------------------------------------------------------------
    # Votes
    # -------------------------------------------------------------------------

    async def create_vote(
        self,
        argument_id: str,
        debate_id: str,
        voter_fingerprint: str,
    ) -> Vote:
        # No await between the check and the insert, so this is atomic on the loop
        key = (argument_id, voter_fingerprint)
        if key in self._vote_keys:
            raise DuplicateVoteError(argument_id, voter_fingerprint)
        vote = Vote(
            id=self._new_id(),
            argument_id=argument_id,
            debate_id=debate_id,
            voter_fingerprint=voter_fingerprint,
            created_at=self._now(),
        )
        self._votes[vote.id] = vote
        self._vote_keys.add(key)
        return vote

    async def list_votes(self, debate_id: str) -> list[Vote]:
        return [v for v in self._votes.values() if v.debate_id == debate_id]

    async def list_all_votes(self) -> list[Vote]:
        return list(self._votes.values())

    async def has_voted(self, argument_id: str, voter_fingerprint: str) -> bool:
        return (argument_id, voter_fingerprint) in self._vote_keys
