"""
Debates module.

Handles debate creation, orchestration, controls and live events.

Public API:
- IDebateService: Interface for debate operations
- Debate / DebateDetail: Stored debate and its read model
- Argument / ArgumentWithVotes: Transcript entries
- DebateEvent: Live event pushed to spectators
- CreateDebateRequest: Request to create a debate
"""

from .interfaces import IDebateService
from .models import (
    Argument,
    ArgumentWithPersona,
    ArgumentWithVotes,
    ControlResponse,
    CreateDebateRequest,
    Debate,
    DebateDetail,
    DebateEvent,
    DebateEventType,
    DebateListItem,
    DebateSortOrder,
    DebateStatus,
    TERMINAL_STATUSES,
)
from .exceptions import (
    ArgumentNotFoundError,
    DebateAlreadyFinishedError,
    DebateNotActiveError,
    DebateNotFoundError,
    DebateNotPausedError,
)

__all__ = [
    # Interface
    "IDebateService",
    # Models
    "Argument",
    "ArgumentWithPersona",
    "ArgumentWithVotes",
    "ControlResponse",
    "CreateDebateRequest",
    "Debate",
    "DebateDetail",
    "DebateEvent",
    "DebateEventType",
    "DebateListItem",
    "DebateSortOrder",
    "DebateStatus",
    "TERMINAL_STATUSES",
    # Exceptions
    "ArgumentNotFoundError",
    "DebateAlreadyFinishedError",
    "DebateNotActiveError",
    "DebateNotFoundError",
    "DebateNotPausedError",
]
