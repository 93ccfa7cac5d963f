"""
Votes module data models.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field


class Vote(BaseModel):
    """A spectator's vote on an argument. Append-only."""

    id: str = Field(..., description="Vote ID")
    argument_id: str = Field(..., description="Argument voted for")
    debate_id: str = Field(..., description="Debate the argument belongs to")
    voter_fingerprint: str = Field(..., description="Opaque client fingerprint")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time",
    )


class CastVoteRequest(BaseModel):
    """Request to vote on an argument."""

    argument_id: str = Field(..., min_length=1)
    debate_id: str = Field(..., min_length=1)
    voter_fingerprint: str = Field(..., min_length=1, max_length=256)


class CastVoteResponse(BaseModel):
    """Created vote plus the argument's recomputed count."""

    vote: Vote
    vote_count: int = Field(..., description="Votes on the argument after this one")
