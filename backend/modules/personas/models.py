"""
Personas module data models.

A persona is a named debating identity whose tone and bias condition the
arguments generated for it. Personas are shared between debates.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Persona(BaseModel):
    """A debating identity."""

    id: str = Field(..., description="Persona ID")
    name: str = Field(..., description="Display name")
    tone: str = Field(..., description="Speaking tone, e.g. 'sarcastic'")
    bias: str = Field(..., description="Ideological bias")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time",
    )


class CreatePersonaRequest(BaseModel):
    """Request to create a persona."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    tone: str = Field(..., min_length=1, max_length=500)
    bias: str = Field(..., min_length=1, max_length=500)


class UpdatePersonaRequest(BaseModel):
    """Partial persona update. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    tone: Optional[str] = Field(None, min_length=1, max_length=500)
    bias: Optional[str] = Field(None, min_length=1, max_length=500)


class PersonaDescriptor(BaseModel):
    """
    Persona reference used when creating a debate.

    Either points at an existing persona by ``id`` or describes a new one
    with ``name``, ``tone`` and ``bias``.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = Field(None, description="Existing persona ID")
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    tone: Optional[str] = Field(None, min_length=1, max_length=500)
    bias: Optional[str] = Field(None, min_length=1, max_length=500)

    @model_validator(mode="after")
    def check_reference_or_definition(self) -> "PersonaDescriptor":
        if self.id:
            return self
        if not (self.name and self.tone and self.bias):
            raise ValueError("Provide either a persona id or name, tone and bias")
        return self


class PersonaStats(BaseModel):
    """Derived per-persona statistics."""

    total_debates: int = Field(default=0, description="Debates participated in")
    wins: int = Field(default=0, description="Debates won")
    total_arguments: int = Field(default=0, description="Arguments made")
    total_votes_received: int = Field(default=0, description="Votes on own arguments")


class PersonaWithStats(Persona, PersonaStats):
    """Persona with its statistics, as listed by the API."""

    pass
