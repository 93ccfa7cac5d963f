"""
Debates module interface.

This is the core business logic interface for Debatrix.
The API layer depends on IDebateService for all debate operations.
"""

from typing import AsyncIterator, Optional, Protocol, runtime_checkable

from .models import (
    ArgumentWithVotes,
    ControlResponse,
    CreateDebateRequest,
    DebateDetail,
    DebateEvent,
    DebateSortOrder,
    DebateStatus,
)


@runtime_checkable
class IDebateService(Protocol):
    """
    Interface for debate operations.

    This protocol defines the contract that the debates module exposes
    to the API layer and other modules.
    """

    async def create_debate(self, request: CreateDebateRequest) -> DebateDetail:
        """
        Create a new debate and start it.

        Each persona descriptor either references an existing persona by id
        or defines a new one. The debate starts ``active`` at round 1 and its
        first tick is scheduled shortly after creation.

        Args:
            request: Topic, personas and optional round count

        Returns:
            The created debate with both personas

        Raises:
            PersonaNotFoundError: If a referenced persona does not exist
            ValidationError: If total_rounds exceeds the configured maximum
        """
        ...

    async def get_debate(self, debate_id: str) -> DebateDetail:
        """
        Get a debate with its personas and counts.

        Raises:
            DebateNotFoundError: If the debate does not exist
        """
        ...

    async def list_debates(
        self,
        search: Optional[str] = None,
        status: Optional[DebateStatus] = None,
        sort_by: DebateSortOrder = DebateSortOrder.NEWEST,
    ) -> list[DebateDetail]:
        """
        List all debates.

        Args:
            search: Case-insensitive substring of the topic or a persona name
            status: Only debates in this status
            sort_by: newest, oldest or by argument count
        """
        ...

    async def list_arguments(self, debate_id: str) -> list[ArgumentWithVotes]:
        """
        List a debate's arguments oldest first with personas and vote counts.

        Raises:
            DebateNotFoundError: If the debate does not exist
        """
        ...

    async def pause_debate(self, debate_id: str) -> ControlResponse:
        """
        Pause an active debate.

        An argument already being generated still completes; no further
        step happens until the debate is resumed.

        Raises:
            DebateNotFoundError: If the debate does not exist
            DebateNotActiveError: If the debate is not active
        """
        ...

    async def resume_debate(self, debate_id: str) -> ControlResponse:
        """
        Resume a paused debate and schedule its next tick.

        Raises:
            DebateNotFoundError: If the debate does not exist
            DebateNotPausedError: If the debate is not paused
        """
        ...

    async def skip_to_judgment(self, debate_id: str) -> ControlResponse:
        """
        Jump to the final round so the debate is judged once it completes.

        Raises:
            DebateNotFoundError: If the debate does not exist
            DebateAlreadyFinishedError: If the debate is completed or errored
        """
        ...

    async def stream_events(self, debate_id: str) -> AsyncIterator[DebateEvent]:
        """
        Subscribe to a debate's live events.

        Raises:
            DebateNotFoundError: If the debate does not exist
        """
        ...
