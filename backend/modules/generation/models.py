"""
Generation module data models.
"""

from pydantic import BaseModel, Field


class TranscriptEntry(BaseModel):
    """One argument as handed to the judge."""

    persona_name: str
    persona_id: str
    content: str
    round_number: int


class Judgment(BaseModel):
    """Outcome of judging a debate."""

    winner_id: str = Field(
        ...,
        description="Winning persona ID, or empty string if the judge named neither",
    )
    judgment_summary: str = Field(..., description="Judge's rationale")
