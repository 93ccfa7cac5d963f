"""Tests for the vote ledger."""

import asyncio

import pytest

from shared.cache import DEBATE_LIST_KEY, debate_arguments_key, debate_key
from shared.exceptions import ConflictError
from modules.debates.exceptions import ArgumentNotFoundError, DebateNotFoundError
from modules.debates.models import DebateStatus
from modules.votes.exceptions import DuplicateVoteError, VotingClosedError
from modules.votes.models import CastVoteRequest
from modules.votes.service import VoteLedger


@pytest.fixture
def ledger(storage, cache) -> VoteLedger:
    return VoteLedger(storage=storage, cache=cache)


@pytest.fixture
def debate_with_argument(storage, create_debate):
    async def _create():
        debate, alice, _ = await create_debate()
        argument = await storage.create_argument(debate.id, alice.id, "Opening.", 1)
        return debate, argument

    return _create


def vote(argument_id: str, debate_id: str, fingerprint: str = "fp1") -> CastVoteRequest:
    return CastVoteRequest(
        argument_id=argument_id,
        debate_id=debate_id,
        voter_fingerprint=fingerprint,
    )


class TestCastVote:
    @pytest.mark.asyncio
    async def test_first_vote_is_recorded(self, ledger, debate_with_argument):
        debate, argument = await debate_with_argument()

        response = await ledger.cast_vote(vote(argument.id, debate.id))

        assert response.vote.argument_id == argument.id
        assert response.vote.voter_fingerprint == "fp1"
        assert response.vote_count == 1

    @pytest.mark.asyncio
    async def test_duplicate_vote_rejected(self, ledger, storage, debate_with_argument):
        debate, argument = await debate_with_argument()
        await ledger.cast_vote(vote(argument.id, debate.id))

        with pytest.raises(DuplicateVoteError) as exc_info:
            await ledger.cast_vote(vote(argument.id, debate.id))

        assert isinstance(exc_info.value, ConflictError)
        assert exc_info.value.message == "Already voted on this argument"
        assert len(await storage.list_votes(debate.id)) == 1
        assert await ledger.argument_vote_count(argument.id, debate.id) == 1

    @pytest.mark.asyncio
    async def test_concurrent_duplicates_store_one_vote(
        self, ledger, storage, debate_with_argument
    ):
        debate, argument = await debate_with_argument()

        results = await asyncio.gather(
            ledger.cast_vote(vote(argument.id, debate.id)),
            ledger.cast_vote(vote(argument.id, debate.id)),
            return_exceptions=True,
        )

        assert sum(isinstance(r, DuplicateVoteError) for r in results) == 1
        assert len(await storage.list_votes(debate.id)) == 1

    @pytest.mark.asyncio
    async def test_different_fingerprints_both_count(self, ledger, debate_with_argument):
        debate, argument = await debate_with_argument()

        await ledger.cast_vote(vote(argument.id, debate.id, "fp1"))
        response = await ledger.cast_vote(vote(argument.id, debate.id, "fp2"))

        assert response.vote_count == 2
        assert await ledger.vote_counts(debate.id) == {argument.id: 2}

    @pytest.mark.asyncio
    async def test_vote_invalidates_cached_views(
        self, ledger, cache, debate_with_argument
    ):
        debate, argument = await debate_with_argument()
        await cache.set(debate_arguments_key(debate.id), [], 60)
        await cache.set(debate_key(debate.id), {}, 60)
        await cache.set(DEBATE_LIST_KEY, [], 60)

        await ledger.cast_vote(vote(argument.id, debate.id))

        assert await cache.get(debate_arguments_key(debate.id)) is None
        assert await cache.get(debate_key(debate.id)) is None
        assert await cache.get(DEBATE_LIST_KEY) is None

    @pytest.mark.asyncio
    async def test_unknown_debate(self, ledger):
        with pytest.raises(DebateNotFoundError):
            await ledger.cast_vote(vote("arg-1", "missing"))

    @pytest.mark.asyncio
    async def test_argument_from_another_debate(
        self, ledger, create_debate, debate_with_argument
    ):
        _, argument = await debate_with_argument()
        other, _, _ = await create_debate()

        with pytest.raises(ArgumentNotFoundError):
            await ledger.cast_vote(vote(argument.id, other.id))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("finish", ["completed", "error"])
    async def test_finished_debate_rejects_votes(
        self, ledger, storage, debate_with_argument, finish
    ):
        debate, argument = await debate_with_argument()
        if finish == "completed":
            await storage.set_debate_winner(debate.id, "", "No winner.")
        else:
            await storage.update_debate(debate.id, status=DebateStatus.ERROR)

        with pytest.raises(VotingClosedError):
            await ledger.cast_vote(vote(argument.id, debate.id))

    @pytest.mark.asyncio
    async def test_paused_debate_accepts_votes(self, ledger, storage, debate_with_argument):
        debate, argument = await debate_with_argument()
        await storage.update_debate(debate.id, status=DebateStatus.PAUSED)

        response = await ledger.cast_vote(vote(argument.id, debate.id))

        assert response.vote_count == 1


class TestCounts:
    @pytest.mark.asyncio
    async def test_counts_for_debate_without_votes(self, ledger, create_debate):
        debate, _, _ = await create_debate()

        assert await ledger.vote_counts(debate.id) == {}
        assert await ledger.argument_vote_count("arg-1", debate.id) == 0
