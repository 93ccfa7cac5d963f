"""
Vote ledger implementation.

Votes are append-only. Counts are always derived from the stored votes.
"""

import logging
from collections import Counter

from shared.cache import ICache, invalidate_debate
from modules.debates.exceptions import ArgumentNotFoundError, DebateNotFoundError
from modules.storage.interfaces import IStorage

from .exceptions import DuplicateVoteError, VotingClosedError
from .interfaces import IVoteLedger
from .models import CastVoteRequest, CastVoteResponse

logger = logging.getLogger(__name__)


class VoteLedger(IVoteLedger):
    """
    Vote ledger over the storage interface.

    Uniqueness is checked before inserting and enforced again by the store,
    so two concurrent votes from the same fingerprint still yield one vote.
    """

    def __init__(self, storage: IStorage, cache: ICache):
        self._storage = storage
        self._cache = cache

    async def cast_vote(self, request: CastVoteRequest) -> CastVoteResponse:
        debate = await self._storage.get_debate(request.debate_id)
        if debate is None:
            raise DebateNotFoundError(request.debate_id)
        if debate.is_terminal:
            raise VotingClosedError(debate.id, debate.status.value)

        arguments = await self._storage.list_arguments(debate.id)
        if not any(a.id == request.argument_id for a in arguments):
            raise ArgumentNotFoundError(request.argument_id, debate.id)

        if await self._storage.has_voted(request.argument_id, request.voter_fingerprint):
            raise DuplicateVoteError(request.argument_id, request.voter_fingerprint)

        vote = await self._storage.create_vote(
            argument_id=request.argument_id,
            debate_id=debate.id,
            voter_fingerprint=request.voter_fingerprint,
        )
        # Vote counts appear in argument, detail and list views
        await invalidate_debate(self._cache, debate.id)

        count = await self.argument_vote_count(request.argument_id, debate.id)
        logger.info("Vote on argument %s in debate %s (now %d)", vote.argument_id, debate.id, count)
        return CastVoteResponse(vote=vote, vote_count=count)

    async def vote_counts(self, debate_id: str) -> dict[str, int]:
        votes = await self._storage.list_votes(debate_id)
        return dict(Counter(v.argument_id for v in votes))

    async def argument_vote_count(self, argument_id: str, debate_id: str) -> int:
        counts = await self.vote_counts(debate_id)
        return counts.get(argument_id, 0)
