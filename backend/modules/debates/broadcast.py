"""
In-process broadcast channel for debate events.

Delivery is best-effort: each subscriber currently connected for a debate id
gets each event at most once, nothing is queued for subscribers that are not
connected, and nothing is replayed. Events for one debate reach a subscriber
in publish order.
"""

import asyncio
import logging
from collections import defaultdict
from typing import AsyncIterator, Callable

from .models import DebateEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DebateEvent], None]

# Per-subscriber buffer for streamed events
DEFAULT_QUEUE_SIZE = 100


class BroadcastChannel:
    """Fans out DebateEvents to subscribers keyed by debate id."""

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._queue_size = queue_size

    def subscribe(self, debate_id: str, handler: EventHandler) -> Callable[[], None]:
        """
        Register a handler for a debate's events.

        Returns:
            A callable that removes the handler again
        """
        self._handlers[debate_id].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(debate_id)
            if handlers and handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    del self._handlers[debate_id]

        return unsubscribe

    def publish(self, debate_id: str, event: DebateEvent) -> int:
        """
        Deliver an event to every current subscriber of a debate.

        A failing handler is logged and does not affect the others.

        Returns:
            Number of handlers the event was delivered to
        """
        delivered = 0
        for handler in list(self._handlers.get(debate_id, ())):
            try:
                handler(event)
                delivered += 1
            except Exception:
                logger.exception("Broadcast handler failed for debate %s", debate_id)
        return delivered

    def subscriber_count(self, debate_id: str) -> int:
        return len(self._handlers.get(debate_id, ()))

    async def stream(self, debate_id: str) -> AsyncIterator[DebateEvent]:
        """
        Yield a debate's events as they are published.

        The subscription is removed when the consumer stops iterating, e.g.
        when an SSE client disconnects.
        """
        queue: asyncio.Queue[DebateEvent] = asyncio.Queue(maxsize=self._queue_size)

        def enqueue(event: DebateEvent) -> None:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.debug(
                    "Dropping %s event for slow subscriber on debate %s",
                    event.type.value,
                    debate_id,
                )

        unsubscribe = self.subscribe(debate_id, enqueue)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()
