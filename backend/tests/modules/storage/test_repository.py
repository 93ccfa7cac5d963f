"""Tests for the Supabase storage backend."""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from modules.debates.models import DebateStatus
from modules.storage import IStorage, SupabaseStorage
from modules.votes.exceptions import DuplicateVoteError


def create_mock_persona_data(persona_id: str = "persona-123", name: str = "Ada") -> dict:
    """Helper to create mock persona data."""
    return {
        "id": persona_id,
        "name": name,
        "tone": "curious",
        "bias": "technologist",
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


def create_mock_debate_data(
    debate_id: str = "debate-123",
    status: str = "active",
    winner_id: str | None = None,
) -> dict:
    """Helper to create mock debate data."""
    return {
        "id": debate_id,
        "topic": "Should AI write laws?",
        "persona_a_id": "persona-a",
        "persona_b_id": "persona-b",
        "status": status,
        "total_rounds": 3,
        "current_round": 1,
        "winner_id": winner_id,
        "judgment_summary": None,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


def create_mock_vote_data(vote_id: str = "vote-123") -> dict:
    """Helper to create mock vote data."""
    return {
        "id": vote_id,
        "argument_id": "argument-123",
        "debate_id": "debate-123",
        "voter_fingerprint": "fp1",
        "created_at": datetime.now(timezone.utc).isoformat(),
    }



def invalid_uuid_error() -> APIError:
    """Error PostgREST returns when an id is not a valid uuid."""
    return APIError({
        "code": "22P02",
        "message": "invalid input syntax for type uuid: \"not-a-uuid\"",
        "details": None,
        "hint": None,
    })


@pytest.fixture
def mock_db() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repo(mock_db) -> SupabaseStorage:
    return SupabaseStorage(mock_db)


def test_satisfies_storage_interface(repo):
    assert isinstance(repo, IStorage)
    assert repo.name == "supabase"


class TestPersonas:
    @pytest.mark.asyncio
    async def test_create_persona(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_persona_data()
        ]

        persona = await repo.create_persona("Ada", "curious", "technologist")

        assert persona.id == "persona-123"
        assert persona.name == "Ada"
        mock_db.table.assert_called_with("personas")
        mock_db.table.return_value.insert.assert_called_with(
            {"name": "Ada", "tone": "curious", "bias": "technologist"}
        )

    @pytest.mark.asyncio
    async def test_get_persona_not_found(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []

        assert await repo.get_persona("missing") is None

    @pytest.mark.asyncio
    async def test_malformed_persona_id_is_not_found(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.side_effect = (
            invalid_uuid_error()
        )

        assert await repo.get_persona("not-a-uuid") is None

    @pytest.mark.asyncio
    async def test_empty_update_reads_current(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            create_mock_persona_data()
        ]

        persona = await repo.update_persona("persona-123", {"name": None})

        assert persona.name == "Ada"
        mock_db.table.return_value.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_blocked_when_referenced(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = [
            {"id": "debate-123"}
        ]

        assert await repo.delete_persona("persona-123") is False
        mock_db.table.return_value.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_unreferenced(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = [
            create_mock_persona_data()
        ]

        assert await repo.delete_persona("persona-123") is True


class TestDebates:
    @pytest.mark.asyncio
    async def test_create_debate(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_debate_data()
        ]

        debate = await repo.create_debate("Should AI write laws?", "persona-a", "persona-b", 3)

        assert debate.status == DebateStatus.ACTIVE
        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted["status"] == "active"
        assert inserted["current_round"] == 1

    @pytest.mark.asyncio
    async def test_completed_debate_with_null_winner_maps_to_empty(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            create_mock_debate_data(status="completed", winner_id=None)
        ]

        debate = await repo.get_debate("debate-123")

        assert debate.status == DebateStatus.COMPLETED
        assert debate.winner_id == ""

    @pytest.mark.asyncio
    async def test_active_debate_keeps_null_winner(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            create_mock_debate_data()
        ]

        debate = await repo.get_debate("debate-123")

        assert debate.winner_id is None

    @pytest.mark.asyncio
    async def test_malformed_debate_id_is_not_found(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.side_effect = (
            invalid_uuid_error()
        )
        mock_db.table.return_value.update.return_value.eq.return_value.execute.side_effect = (
            invalid_uuid_error()
        )

        assert await repo.get_debate("not-a-uuid") is None
        assert await repo.update_debate("not-a-uuid", current_round=2) is None

    @pytest.mark.asyncio
    async def test_lookup_errors_other_than_bad_uuid_propagate(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.side_effect = APIError({
            "code": "57014",
            "message": "canceling statement due to statement timeout",
            "details": None,
            "hint": None,
        })

        with pytest.raises(APIError):
            await repo.get_debate("debate-123")

    @pytest.mark.asyncio
    async def test_update_serializes_status(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [
            create_mock_debate_data(status="paused")
        ]

        debate = await repo.update_debate("debate-123", status=DebateStatus.PAUSED)

        assert debate.status == DebateStatus.PAUSED
        mock_db.table.return_value.update.assert_called_with({"status": "paused"})

    @pytest.mark.asyncio
    async def test_update_rejects_other_fields(self, repo):
        with pytest.raises(ValueError):
            await repo.update_debate("debate-123", topic="New topic")

    @pytest.mark.asyncio
    async def test_empty_winner_stored_as_null(self, repo, mock_db):
        await repo.set_debate_winner("debate-123", "", "Judgment unavailable: timeout")

        mock_db.table.return_value.update.assert_called_with({
            "winner_id": None,
            "judgment_summary": "Judgment unavailable: timeout",
            "status": "completed",
        })


class TestVotes:
    @pytest.mark.asyncio
    async def test_create_vote(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_vote_data()
        ]

        vote = await repo.create_vote("argument-123", "debate-123", "fp1")

        assert vote.id == "vote-123"
        mock_db.table.assert_called_with("votes")

    @pytest.mark.asyncio
    async def test_unique_violation_maps_to_duplicate_vote(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError({
            "code": "23505",
            "message": "duplicate key value violates unique constraint",
            "details": None,
            "hint": None,
        })

        with pytest.raises(DuplicateVoteError):
            await repo.create_vote("argument-123", "debate-123", "fp1")

    @pytest.mark.asyncio
    async def test_other_api_errors_propagate(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError({
            "code": "23503",
            "message": "foreign key violation",
            "details": None,
            "hint": None,
        })

        with pytest.raises(APIError):
            await repo.create_vote("argument-123", "debate-123", "fp1")

    @pytest.mark.asyncio
    async def test_has_voted(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value.eq.return_value.eq.return_value
        query.limit.return_value.execute.return_value.data = [{"id": "vote-123"}]

        assert await repo.has_voted("argument-123", "fp1") is True
