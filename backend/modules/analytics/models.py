"""
Analytics module data models.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from modules.debates.models import DebateStatus


class PlatformStats(BaseModel):
    """Platform-wide counts."""

    total_debates: int = 0
    active_debates: int = Field(default=0, description="Active or paused")
    completed_debates: int = 0
    total_arguments: int = 0
    total_votes: int = 0
    total_personas: int = 0


class TrendingTopic(BaseModel):
    """A word that appears in debate topics, with its frequency."""

    word: str
    count: int


class ActivityItem(BaseModel):
    """A recent debate, summarized for the activity feed."""

    id: str
    topic: str
    status: DebateStatus
    created_at: datetime
    persona_a: str = Field(..., description="Persona A's name")
    persona_b: str = Field(..., description="Persona B's name")
