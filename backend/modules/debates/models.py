"""
Debates module data models.

These models define the core data structures for the Debatrix debate system.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from modules.personas.models import Persona, PersonaDescriptor


class DebateStatus(str, Enum):
    """Debate lifecycle status."""

    ACTIVE = "active"        # Ticks are running
    PAUSED = "paused"        # Ticks skip until resumed
    COMPLETED = "completed"  # Judged (terminal)
    ERROR = "error"          # Generation failed (terminal)


TERMINAL_STATUSES = frozenset({DebateStatus.COMPLETED, DebateStatus.ERROR})


class DebateSortOrder(str, Enum):
    """Sort orders for the debate list."""

    NEWEST = "newest"
    OLDEST = "oldest"
    ARGUMENTS = "arguments"


class CreateDebateRequest(BaseModel):
    """Request to create a new debate."""

    model_config = ConfigDict(str_strip_whitespace=True)

    topic: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="The topic to debate",
    )
    persona_a: PersonaDescriptor = Field(..., description="Opening persona")
    persona_b: PersonaDescriptor = Field(..., description="Responding persona")
    total_rounds: Optional[int] = Field(
        None,
        ge=1,
        description="Number of rounds (defaults to DEFAULT_TOTAL_ROUNDS)",
    )


class Debate(BaseModel):
    """A debate record as persisted."""

    id: str = Field(..., description="Debate ID")
    topic: str = Field(..., description="The debate topic")
    persona_a_id: str = Field(..., description="Persona that opens each round")
    persona_b_id: str = Field(..., description="Persona that responds")
    status: DebateStatus = Field(default=DebateStatus.ACTIVE, description="Current status")
    total_rounds: int = Field(default=3, ge=1, description="Number of rounds")
    current_round: int = Field(default=1, ge=1, description="Current round (1-indexed)")
    winner_id: Optional[str] = Field(
        None,
        description="Winning persona ID; empty string if the judge named neither",
    )
    judgment_summary: Optional[str] = Field(None, description="Judge's rationale")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time",
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class DebateDetail(Debate):
    """Debate with its personas and derived counts."""

    persona_a: Persona
    persona_b: Persona
    argument_count: int = Field(default=0, description="Arguments so far")
    spectator_count: int = Field(default=0, description="Live event subscribers")


# Debates are listed with the same shape as the detail view
DebateListItem = DebateDetail


class Argument(BaseModel):
    """A single generated argument. Append-only."""

    id: str = Field(..., description="Argument ID")
    debate_id: str = Field(..., description="Parent debate ID")
    persona_id: str = Field(..., description="Persona that argued")
    content: str = Field(..., description="Argument text")
    round_number: int = Field(..., ge=1, description="Round the argument belongs to")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time",
    )


class ArgumentWithPersona(Argument):
    """Argument denormalized with its persona, as broadcast to spectators."""

    persona: Persona


class ArgumentWithVotes(ArgumentWithPersona):
    """Argument with its derived vote count."""

    vote_count: int = Field(default=0, description="Votes received")


class ControlResponse(BaseModel):
    """Result of a pause, resume or skip request."""

    debate_id: str
    status: DebateStatus
    message: str


# Broadcast event types

class DebateEventType(str, Enum):
    """Types of events broadcast to debate spectators."""

    TYPING = "typing"        # A persona started generating
    ARGUMENT = "argument"    # A new argument was persisted
    JUDGMENT = "judgment"    # The debate was judged
    ERROR = "error"          # Generation or judgment failed
    STATUS = "status"        # Paused or resumed


class DebateEvent(BaseModel):
    """
    Event pushed to spectators of a debate.

    Events are liveness hints: clients refetch canonical state from the
    REST endpoints rather than treating the payload as the record.
    """

    type: DebateEventType = Field(..., description="Event type")
    debate_id: str = Field(..., description="Debate ID")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Event timestamp",
    )

    # Optional fields depending on event type
    persona_name: Optional[str] = Field(None, description="Typing persona")
    argument: Optional[ArgumentWithPersona] = Field(None, description="New argument")
    winner_id: Optional[str] = Field(None, description="Winner (judgment)")
    judgment_summary: Optional[str] = Field(None, description="Rationale (judgment)")
    message: Optional[str] = Field(None, description="Error message")
    status: Optional[DebateStatus] = Field(None, description="New status")

    @classmethod
    def typing(cls, debate_id: str, persona_name: str) -> "DebateEvent":
        return cls(type=DebateEventType.TYPING, debate_id=debate_id, persona_name=persona_name)

    @classmethod
    def new_argument(cls, debate_id: str, argument: ArgumentWithPersona) -> "DebateEvent":
        return cls(type=DebateEventType.ARGUMENT, debate_id=debate_id, argument=argument)

    @classmethod
    def judgment(cls, debate_id: str, winner_id: str, judgment_summary: str) -> "DebateEvent":
        return cls(
            type=DebateEventType.JUDGMENT,
            debate_id=debate_id,
            winner_id=winner_id,
            judgment_summary=judgment_summary,
        )

    @classmethod
    def error(cls, debate_id: str, message: str) -> "DebateEvent":
        return cls(type=DebateEventType.ERROR, debate_id=debate_id, message=message)

    @classmethod
    def status_changed(cls, debate_id: str, status: DebateStatus) -> "DebateEvent":
        return cls(type=DebateEventType.STATUS, debate_id=debate_id, status=status)

    def to_sse(self) -> dict[str, str]:
        """Convert to the dict sse-starlette expects."""
        return {
            "event": self.type.value,
            "data": self.model_dump_json(exclude_none=True),
        }
