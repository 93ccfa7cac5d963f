"""
Votes module interface.
"""

from typing import Protocol, runtime_checkable

from .models import CastVoteRequest, CastVoteResponse


@runtime_checkable
class IVoteLedger(Protocol):
    """
    Interface for spectator votes.

    Each voter fingerprint may vote on a given argument at most once.
    """

    async def cast_vote(self, request: CastVoteRequest) -> CastVoteResponse:
        """
        Record a vote on an argument.

        Args:
            request: Argument, its debate and the voter's fingerprint

        Returns:
            The stored vote and the argument's new vote count

        Raises:
            DebateNotFoundError: If the debate does not exist
            ArgumentNotFoundError: If the argument is not in the debate
            VotingClosedError: If the debate is completed or errored
            DuplicateVoteError: If the fingerprint already voted on the argument
        """
        ...

    async def vote_counts(self, debate_id: str) -> dict[str, int]:
        """Vote count per argument id for a debate. Arguments without votes are omitted."""
        ...

    async def argument_vote_count(self, argument_id: str, debate_id: str) -> int:
        ...
