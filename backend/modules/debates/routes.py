"""
Debate API endpoints.

Provides REST endpoints for debates and their controls, plus an SSE stream
of live debate events. Module exceptions propagate to the application's
exception handlers, which map them to HTTP status codes.
"""

from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Query
from sse_starlette.sse import EventSourceResponse

from api.dependencies import get_debate_service

from .interfaces import IDebateService
from .models import (
    ArgumentWithVotes,
    ControlResponse,
    CreateDebateRequest,
    DebateDetail,
    DebateEvent,
    DebateSortOrder,
    DebateStatus,
)

router = APIRouter()

# Seconds between SSE keep-alive comments
SSE_PING_INTERVAL = 15


@router.post("", response_model=DebateDetail, status_code=201)
async def create_debate(
    request: CreateDebateRequest,
    service: IDebateService = Depends(get_debate_service),
) -> DebateDetail:
    """
    Create a new debate.

    The debate starts immediately; its first argument follows after a short
    delay. Subscribe to the events endpoint to watch it live.
    """
    return await service.create_debate(request)


@router.get("", response_model=list[DebateDetail])
async def list_debates(
    search: Optional[str] = Query(default=None, description="Match topic or persona name"),
    status: Optional[DebateStatus] = Query(default=None, description="Filter by status"),
    sort_by: DebateSortOrder = Query(default=DebateSortOrder.NEWEST, description="Sort order"),
    service: IDebateService = Depends(get_debate_service),
) -> list[DebateDetail]:
    """List debates, newest first unless another order is requested."""
    return await service.list_debates(search=search, status=status, sort_by=sort_by)


@router.get("/{debate_id}", response_model=DebateDetail)
async def get_debate(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
) -> DebateDetail:
    return await service.get_debate(debate_id)


@router.get("/{debate_id}/arguments", response_model=list[ArgumentWithVotes])
async def list_arguments(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
) -> list[ArgumentWithVotes]:
    """Get a debate's transcript, oldest argument first, with vote counts."""
    return await service.list_arguments(debate_id)


@router.post("/{debate_id}/pause", response_model=ControlResponse)
async def pause_debate(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
) -> ControlResponse:
    """
    Pause an active debate.

    An argument that is already being generated is still delivered.
    """
    return await service.pause_debate(debate_id)


@router.post("/{debate_id}/resume", response_model=ControlResponse)
async def resume_debate(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
) -> ControlResponse:
    return await service.resume_debate(debate_id)


@router.post("/{debate_id}/skip", response_model=ControlResponse)
async def skip_to_judgment(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
) -> ControlResponse:
    """Jump to the final round; the debate is judged once it completes."""
    return await service.skip_to_judgment(debate_id)


async def event_generator(events: AsyncIterator[DebateEvent]):
    """
    Format debate events for SSE.

    Yields events in the format:
        event: <event_type>
        data: <json_data>
    """
    try:
        async for event in events:
            yield event.to_sse()
    finally:
        await events.aclose()


@router.get("/{debate_id}/events")
async def stream_debate_events(
    debate_id: str,
    service: IDebateService = Depends(get_debate_service),
):
    """
    Stream a debate's live events via SSE.

    Event types (from DebateEventType):
    - typing: A persona started generating an argument
    - argument: A new argument was added
    - judgment: The debate was judged
    - error: Generation or judgment failed
    - status: The debate was paused or resumed

    Events are not replayed; fetch the debate and its arguments for the
    current state.
    """
    events = await service.stream_events(debate_id)
    return EventSourceResponse(
        event_generator(events),
        media_type="text/event-stream",
        ping=SSE_PING_INTERVAL,
    )
