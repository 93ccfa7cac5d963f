"""
Supabase storage backend.

Encapsulates all Supabase queries and data mapping for the tables:
- personas
- debates
- arguments
- votes

The schema lives in migrations/001_initial_schema.sql. Vote uniqueness is a
table constraint; a violation surfaces as DuplicateVoteError.
"""

from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository
from modules.debates.models import Argument, Debate, DebateStatus
from modules.personas.models import Persona
from modules.votes.exceptions import DuplicateVoteError
from modules.votes.models import Vote


# Postgres error codes
UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"  # malformed uuid

PERSONA_FIELDS = frozenset({"name", "tone", "bias"})
DEBATE_FIELDS = frozenset({"status", "current_round"})


class SupabaseStorage(BaseRepository[Debate]):
    """
    IStorage implementation over a Supabase client.

    The supabase client is synchronous; calls are made inline from the async
    methods, the same way the rest of the service layer uses it.
    """

    name = "supabase"

    def __init__(self, db: Client) -> None:
        super().__init__(db)

    # -------------------------------------------------------------------------
    # Personas
    # -------------------------------------------------------------------------

    async def create_persona(self, name: str, tone: str, bias: str) -> Persona:
        result = self._db.table("personas").insert(
            {"name": name, "tone": tone, "bias": bias}
        ).execute()
        return self._map_to_persona(result.data[0])

    async def get_persona(self, persona_id: str) -> Optional[Persona]:
        rows = self._rows_by_id(self._db.table("personas").select("*"), persona_id)
        if not rows:
            return None
        return self._map_to_persona(rows[0])

    async def list_personas(self) -> list[Persona]:
        result = self._db.table("personas").select("*").order(
            "created_at", desc=True
        ).execute()
        return [self._map_to_persona(row) for row in result.data]

    async def update_persona(
        self,
        persona_id: str,
        updates: dict[str, Any],
    ) -> Optional[Persona]:
        data = {k: v for k, v in updates.items() if k in PERSONA_FIELDS and v is not None}
        if not data:
            return await self.get_persona(persona_id)
        rows = self._rows_by_id(self._db.table("personas").update(data), persona_id)
        if not rows:
            return None
        return self._map_to_persona(rows[0])

    async def delete_persona(self, persona_id: str) -> bool:
        for column in ("persona_a_id", "persona_b_id", "winner_id"):
            in_use = self._db.table("debates").select("id").eq(
                column, persona_id
            ).limit(1).execute()
            if in_use.data:
                return False

        result = self._db.table("personas").delete().eq("id", persona_id).execute()
        return bool(result.data)

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
        data = {
            "topic": topic,
            "persona_a_id": persona_a_id,
            "persona_b_id": persona_b_id,
            "total_rounds": total_rounds,
            "status": DebateStatus.ACTIVE.value,
            "current_round": 1,
        }
        result = self._db.table("debates").insert(data).execute()
        return self._map_to_debate(result.data[0])

    async def get_debate(self, debate_id: str) -> Optional[Debate]:
        rows = self._rows_by_id(self._db.table("debates").select("*"), debate_id)
        if not rows:
            return None
        return self._map_to_debate(rows[0])

    async def list_debates(self) -> list[Debate]:
        result = self._db.table("debates").select("*").order(
            "created_at", desc=True
        ).execute()
        return [self._map_to_debate(row) for row in result.data]

    async def update_debate(self, debate_id: str, **fields: Any) -> Optional[Debate]:
        unknown = set(fields) - DEBATE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update debate fields: {sorted(unknown)}")

        data: dict[str, Any] = dict(fields)
        if isinstance(data.get("status"), DebateStatus):
            data["status"] = data["status"].value

        rows = self._rows_by_id(self._db.table("debates").update(data), debate_id)
        if not rows:
            return None
        return self._map_to_debate(rows[0])

    async def set_debate_winner(
        self,
        debate_id: str,
        winner_id: str,
        judgment_summary: str,
    ) -> None:
        data = {
            # winner_id is a foreign key; an unresolved winner is stored as NULL
            "winner_id": winner_id or None,
            "judgment_summary": judgment_summary,
            "status": DebateStatus.COMPLETED.value,
        }
        self._db.table("debates").update(data).eq("id", debate_id).execute()

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
        data = {
            "debate_id": debate_id,
            "persona_id": persona_id,
            "content": content,
            "round_number": round_number,
        }
        result = self._db.table("arguments").insert(data).execute()
        return self._map_to_argument(result.data[0])

    async def list_arguments(self, debate_id: str) -> list[Argument]:
        result = self._db.table("arguments").select("*").eq(
            "debate_id", debate_id
        ).order("created_at").execute()
        return [self._map_to_argument(row) for row in result.data]

    async def list_all_arguments(self) -> list[Argument]:
        result = self._db.table("arguments").select("*").order("created_at").execute()
        return [self._map_to_argument(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Votes
    # -------------------------------------------------------------------------

    async def create_vote(
        self,
        argument_id: str,
        debate_id: str,
        voter_fingerprint: str,
    ) -> Vote:
        data = {
            "argument_id": argument_id,
            "debate_id": debate_id,
            "voter_fingerprint": voter_fingerprint,
        }
        try:
            result = self._db.table("votes").insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateVoteError(argument_id, voter_fingerprint) from e
            raise
        return self._map_to_vote(result.data[0])

    async def list_votes(self, debate_id: str) -> list[Vote]:
        result = self._db.table("votes").select("*").eq("debate_id", debate_id).execute()
        return [self._map_to_vote(row) for row in result.data]

    async def list_all_votes(self) -> list[Vote]:
        result = self._db.table("votes").select("*").execute()
        return [self._map_to_vote(row) for row in result.data]

    async def has_voted(self, argument_id: str, voter_fingerprint: str) -> bool:
        result = self._db.table("votes").select("id").eq(
            "argument_id", argument_id
        ).eq("voter_fingerprint", voter_fingerprint).limit(1).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Private query helpers
    # -------------------------------------------------------------------------

    def _rows_by_id(self, query: Any, row_id: str) -> list[dict[str, Any]]:
        """
        Run a query filtered on the primary key.

        An id that is not a valid uuid matches no row, so callers report it
        as not found rather than as a database error.
        """
        try:
            return query.eq("id", row_id).execute().data
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return []
            raise

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_persona(self, data: dict[str, Any]) -> Persona:
        """Map database row to Persona model."""
        return Persona(
            id=str(data["id"]),
            name=data["name"],
            tone=data["tone"],
            bias=data["bias"],
            created_at=data["created_at"],
        )

    def _map_to_debate(self, data: dict[str, Any]) -> Debate:
        """Map database row to Debate model."""
        status = DebateStatus(data["status"])
        winner_id = data.get("winner_id")
        if status == DebateStatus.COMPLETED and winner_id is None:
            winner_id = ""
        return Debate(
            id=str(data["id"]),
            topic=data["topic"],
            persona_a_id=str(data["persona_a_id"]),
            persona_b_id=str(data["persona_b_id"]),
            status=status,
            total_rounds=data["total_rounds"],
            current_round=data["current_round"],
            winner_id=str(winner_id) if winner_id is not None else None,
            judgment_summary=data.get("judgment_summary"),
            created_at=data["created_at"],
        )

    def _map_to_argument(self, data: dict[str, Any]) -> Argument:
        """Map database row to Argument model."""
        return Argument(
            id=str(data["id"]),
            debate_id=str(data["debate_id"]),
            persona_id=str(data["persona_id"]),
            content=data["content"],
            round_number=data["round_number"],
            created_at=data["created_at"],
        )

    def _map_to_vote(self, data: dict[str, Any]) -> Vote:
        """Map database row to Vote model."""
        return Vote(
            id=str(data["id"]),
            argument_id=str(data["argument_id"]),
            debate_id=str(data["debate_id"]),
            voter_fingerprint=data["voter_fingerprint"],
            created_at=data["created_at"],
        )
