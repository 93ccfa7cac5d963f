"""
Storage module interface.

Both backends (in-memory and Supabase) satisfy the same ordering contracts:
personas and debates list newest first, arguments within a debate list
oldest first.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from modules.debates.models import Argument, Debate
from modules.personas.models import Persona
from modules.votes.models import Vote


@runtime_checkable
class IStorage(Protocol):
    """
    Persistence contract for personas, debates, arguments and votes.

    Lookups return None for missing records instead of raising; the service
    layer decides which missing record is an error.
    """

    name: str

    # Personas

    async def create_persona(self, name: str, tone: str, bias: str) -> Persona:
        ...

    async def get_persona(self, persona_id: str) -> Optional[Persona]:
        ...

    async def list_personas(self) -> list[Persona]:
        ...

    async def update_persona(
        self,
        persona_id: str,
        updates: dict[str, Any],
    ) -> Optional[Persona]:
        """Apply name/tone/bias updates. Returns None if the persona is missing."""
        ...

    async def delete_persona(self, persona_id: str) -> bool:
        """
        Delete a persona.

        Returns:
            False if any debate references the persona or it does not exist,
            True once deleted.
        """
        ...

    # Debates

    async def create_debate(
        self,
        topic: str,
        persona_a_id: str,
        persona_b_id: str,
        total_rounds: int,
    ) -> Debate:
        """Create a debate in ``active`` status at round 1."""
        ...

    async def get_debate(self, debate_id: str) -> Optional[Debate]:
        ...

    async def list_debates(self) -> list[Debate]:
        ...

    async def update_debate(self, debate_id: str, **fields: Any) -> Optional[Debate]:
        """Update status and/or current_round. Returns None if missing."""
        ...

    async def set_debate_winner(
        self,
        debate_id: str,
        winner_id: str,
        judgment_summary: str,
    ) -> None:
        """Set winner, summary and ``completed`` status in one write."""
        ...

    # Arguments

    async def create_argument(
        self,
        debate_id: str,
        persona_id: str,
        content: str,
        round_number: int,
    ) -> Argument:
        ...

    async def list_arguments(self, debate_id: str) -> list[Argument]:
        ...

    async def list_all_arguments(self) -> list[Argument]:
        ...

    # Votes

    async def create_vote(
        self,
        argument_id: str,
        debate_id: str,
        voter_fingerprint: str,
    ) -> Vote:
        """
        Insert a vote.

        Raises:
            DuplicateVoteError: If (argument_id, voter_fingerprint) exists
        """
        ...

    async def list_votes(self, debate_id: str) -> list[Vote]:
        ...

    async def list_all_votes(self) -> list[Vote]:
        ...

    async def has_voted(self, argument_id: str, voter_fingerprint: str) -> bool:
        ...
