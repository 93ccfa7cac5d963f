"""Tests for debates module models."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from modules.debates.models import (
    ArgumentWithPersona,
    CreateDebateRequest,
    Debate,
    DebateEvent,
    DebateEventType,
    DebateStatus,
)
from modules.personas.models import Persona


class TestCreateDebateRequest:
    def test_accepts_persona_reference_or_definition(self):
        request = CreateDebateRequest(
            topic="Pineapple on pizza",
            persona_a={"id": "persona-1"},
            persona_b={"name": "Chef", "tone": "stern", "bias": "traditionalist"},
        )
        assert request.persona_a.id == "persona-1"
        assert request.persona_b.name == "Chef"
        assert request.total_rounds is None

    def test_incomplete_persona_definition_rejected(self):
        with pytest.raises(ValidationError):
            CreateDebateRequest(
                topic="Pineapple on pizza",
                persona_a={"name": "Chef"},
                persona_b={"id": "persona-2"},
            )

    def test_empty_topic_rejected(self):
        with pytest.raises(ValidationError):
            CreateDebateRequest(
                topic="",
                persona_a={"id": "persona-1"},
                persona_b={"id": "persona-2"},
            )

    def test_blank_topic_rejected(self):
        with pytest.raises(ValidationError):
            CreateDebateRequest(
                topic="   \n\t",
                persona_a={"id": "persona-1"},
                persona_b={"id": "persona-2"},
            )

    def test_topic_is_trimmed(self):
        request = CreateDebateRequest(
            topic="  Pineapple on pizza  ",
            persona_a={"id": "persona-1"},
            persona_b={"name": " Chef ", "tone": "stern", "bias": "traditionalist"},
        )
        assert request.topic == "Pineapple on pizza"
        assert request.persona_b.name == "Chef"

    def test_zero_rounds_rejected(self):
        with pytest.raises(ValidationError):
            CreateDebateRequest(
                topic="Pineapple on pizza",
                persona_a={"id": "persona-1"},
                persona_b={"id": "persona-2"},
                total_rounds=0,
            )


class TestDebate:
    @pytest.mark.parametrize(
        "status,terminal",
        [
            (DebateStatus.ACTIVE, False),
            (DebateStatus.PAUSED, False),
            (DebateStatus.COMPLETED, True),
            (DebateStatus.ERROR, True),
        ],
    )
    def test_is_terminal(self, status, terminal):
        debate = Debate(
            id="debate-1",
            topic="Topic",
            persona_a_id="a",
            persona_b_id="b",
            status=status,
        )
        assert debate.is_terminal is terminal


class TestDebateEvent:
    def test_typing_to_sse(self):
        sse = DebateEvent.typing("debate-1", "Alice").to_sse()

        assert sse["event"] == "typing"
        data = json.loads(sse["data"])
        assert data["type"] == "typing"
        assert data["debate_id"] == "debate-1"
        assert data["persona_name"] == "Alice"
        assert "argument" not in data

    def test_argument_event_embeds_persona(self):
        persona = Persona(id="p1", name="Alice", tone="calm", bias="none")
        argument = ArgumentWithPersona(
            id="arg-1",
            debate_id="debate-1",
            persona_id="p1",
            content="Consider the evidence.",
            round_number=1,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            persona=persona,
        )

        event = DebateEvent.new_argument("debate-1", argument)
        data = json.loads(event.to_sse()["data"])

        assert event.type == DebateEventType.ARGUMENT
        assert data["argument"]["persona"]["name"] == "Alice"
        assert data["argument"]["content"] == "Consider the evidence."

    def test_judgment_event_keeps_empty_winner(self):
        data = json.loads(DebateEvent.judgment("debate-1", "", "Too close.").to_sse()["data"])

        assert data["winner_id"] == ""
        assert data["judgment_summary"] == "Too close."

    def test_status_event(self):
        event = DebateEvent.status_changed("debate-1", DebateStatus.PAUSED)

        assert event.to_sse()["event"] == "status"
        assert json.loads(event.to_sse()["data"])["status"] == "paused"
