"""
Debate orchestrator.

Advances a debate one step per tick: generate at most one argument, advance
the round, or judge. After each step that leaves the debate active it
schedules the next tick on the event loop after a pacing delay.

Ticks never hold a lock across an await. Instead every tick:
- re-reads the debate at entry and does nothing unless it is ``active``
  (this is how pause takes effect: after the current in-flight step)
- recomputes whose turn it is from the persisted arguments, so a resumed or
  repeated tick picks up exactly where the transcript left off

Per debate there is at most one pending timer and at most one running tick.
A timer that fires while a tick is running is coalesced into one follow-up
tick after the running one finishes.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from shared.cache import ICache, invalidate_debate
from shared.config import Settings
from shared.exceptions import DebatrixError
from modules.generation.interfaces import IContentGenerator
from modules.generation.models import TranscriptEntry
from modules.personas.models import Persona
from modules.storage.interfaces import IStorage

from .broadcast import BroadcastChannel
from .models import (
    Argument,
    ArgumentWithPersona,
    Debate,
    DebateEvent,
    DebateStatus,
)

logger = logging.getLogger(__name__)


class TickOutcome(str, Enum):
    """What a single tick did."""

    SKIPPED = "skipped"                      # Missing, not active, or broken debate
    ARGUMENT = "argument"                    # Persisted one argument
    ROUND_ADVANCED = "round_advanced"        # Moved to the next round
    JUDGED = "judged"                        # Completed with a judgment
    GENERATION_FAILED = "generation_failed"  # Moved to error status
    JUDGMENT_FAILED = "judgment_failed"      # Completed without a winner


JUDGMENT_UNAVAILABLE = "Judgment unavailable: {reason}"


def _failure_reason(error: Exception, default: str) -> str:
    if isinstance(error, DebatrixError):
        return error.message
    return str(error) or default


class DebateOrchestrator:
    """Timer-driven state machine that runs debates."""

    def __init__(
        self,
        storage: IStorage,
        generator: IContentGenerator,
        cache: ICache,
        broadcaster: BroadcastChannel,
        settings: Settings,
    ):
        self._storage = storage
        self._generator = generator
        self._cache = cache
        self._broadcaster = broadcaster
        self._argument_delay = settings.argument_tick_delay
        self._round_delay = settings.round_tick_delay

        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._running: dict[str, asyncio.Task] = {}
        self._rerun: set[str] = set()
        self._closed = False

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def schedule(self, debate_id: str, delay: float) -> None:
        """
        Run a tick for the debate after ``delay`` seconds.

        Replaces any tick already pending for the debate. Must be called from
        within the running event loop. Does nothing after ``shutdown()``.
        """
        if self._closed:
            logger.debug("Orchestrator closed, not scheduling debate %s", debate_id)
            return
        loop = asyncio.get_running_loop()
        pending = self._timers.pop(debate_id, None)
        if pending is not None:
            pending.cancel()
        self._timers[debate_id] = loop.call_later(delay, self._fire, debate_id)

    def is_scheduled(self, debate_id: str) -> bool:
        return debate_id in self._timers

    def is_running(self, debate_id: str) -> bool:
        return debate_id in self._running

    def _fire(self, debate_id: str) -> None:
        self._timers.pop(debate_id, None)
        if self._closed:
            return
        if debate_id in self._running:
            self._rerun.add(debate_id)
            return
        self._start(debate_id)

    def _start(self, debate_id: str) -> None:
        task = asyncio.get_running_loop().create_task(
            self._run(debate_id),
            name=f"debate-tick:{debate_id}",
        )
        self._running[debate_id] = task
        task.add_done_callback(lambda t: self._finished(debate_id, t))

    def _finished(self, debate_id: str, task: asyncio.Task) -> None:
        if self._running.get(debate_id) is task:
            del self._running[debate_id]
        if debate_id in self._rerun:
            self._rerun.discard(debate_id)
            # The finished tick already scheduled its successor
            if debate_id not in self._timers and not task.cancelled():
                self._start(debate_id)

    async def _run(self, debate_id: str) -> Optional[TickOutcome]:
        try:
            return await self.tick(debate_id)
        except Exception as e:
            logger.exception("Tick crashed for debate %s", debate_id)
            try:
                await self._fail_debate(debate_id, _failure_reason(e, "Debate step failed"))
            except Exception:
                logger.exception("Could not record failure for debate %s", debate_id)
            return None

    async def shutdown(self) -> None:
        """
        Stop scheduling, wait for running ticks to finish, then cancel
        pending timers. Running ticks cannot schedule successors once this
        has started.
        """
        self._closed = True
        self._rerun.clear()
        running = list(self._running.values())
        if running:
            await asyncio.gather(*running, return_exceptions=True)
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    async def tick(self, debate_id: str) -> TickOutcome:
        """
        Perform one step of the debate.

        Safe to call at any time: a debate that is missing or not active is
        left untouched and nothing is broadcast.
        """
        debate = await self._storage.get_debate(debate_id)
        if debate is None or debate.status != DebateStatus.ACTIVE:
            return TickOutcome.SKIPPED

        persona_a = await self._storage.get_persona(debate.persona_a_id)
        persona_b = await self._storage.get_persona(debate.persona_b_id)
        if persona_a is None or persona_b is None:
            logger.warning("Debate %s references a missing persona, not ticking", debate_id)
            return TickOutcome.SKIPPED

        arguments = await self._storage.list_arguments(debate_id)
        round_arguments = [a for a in arguments if a.round_number == debate.current_round]

        if len(round_arguments) >= 2:
            outcome = await self._complete_round(debate, persona_a, persona_b, arguments)
        else:
            if not round_arguments:
                speaker = persona_a
            elif round_arguments[0].persona_id == persona_a.id:
                speaker = persona_b
            else:
                speaker = persona_a
            outcome = await self._generate(debate, speaker, persona_a, persona_b, arguments)

        logger.info(
            "Debate %s round %d/%d: %s",
            debate_id,
            debate.current_round,
            debate.total_rounds,
            outcome.value,
        )
        return outcome

    async def _generate(
        self,
        debate: Debate,
        speaker: Persona,
        persona_a: Persona,
        persona_b: Persona,
        arguments: list[Argument],
    ) -> TickOutcome:
        self._broadcaster.publish(debate.id, DebateEvent.typing(debate.id, speaker.name))

        names = {persona_a.id: persona_a.name, persona_b.id: persona_b.name}
        prior_lines = [
            f"{names.get(arg.persona_id, 'Unknown')}: {arg.content}" for arg in arguments
        ]

        try:
            content = await self._generator.generate_argument(
                debate.topic,
                speaker.name,
                speaker.tone,
                speaker.bias,
                prior_lines,
                debate.current_round,
            )
        except Exception as e:
            logger.exception("Argument generation failed for debate %s", debate.id)
            await self._fail_debate(debate.id, _failure_reason(e, "Failed to generate argument"))
            return TickOutcome.GENERATION_FAILED

        argument = await self._storage.create_argument(
            debate_id=debate.id,
            persona_id=speaker.id,
            content=content,
            round_number=debate.current_round,
        )
        await invalidate_debate(self._cache, debate.id)

        self._broadcaster.publish(
            debate.id,
            DebateEvent.new_argument(
                debate.id,
                ArgumentWithPersona(**argument.model_dump(), persona=speaker),
            ),
        )
        self.schedule(debate.id, self._argument_delay)
        return TickOutcome.ARGUMENT

    async def _complete_round(
        self,
        debate: Debate,
        persona_a: Persona,
        persona_b: Persona,
        arguments: list[Argument],
    ) -> TickOutcome:
        if debate.current_round < debate.total_rounds:
            await self._storage.update_debate(debate.id, current_round=debate.current_round + 1)
            await invalidate_debate(self._cache, debate.id, include_arguments=False)
            self.schedule(debate.id, self._round_delay)
            return TickOutcome.ROUND_ADVANCED

        return await self._judge(debate, persona_a, persona_b, arguments)

    async def _judge(
        self,
        debate: Debate,
        persona_a: Persona,
        persona_b: Persona,
        arguments: list[Argument],
    ) -> TickOutcome:
        names = {persona_a.id: persona_a.name, persona_b.id: persona_b.name}
        transcript = [
            TranscriptEntry(
                persona_name=names.get(arg.persona_id, "Unknown"),
                persona_id=arg.persona_id,
                content=arg.content,
                round_number=arg.round_number,
            )
            for arg in arguments
        ]

        try:
            judgment = await self._generator.judge(
                debate.topic,
                persona_a.name,
                persona_b.name,
                transcript,
            )
        except Exception as e:
            logger.exception("Judgment failed for debate %s", debate.id)
            reason = _failure_reason(e, "Failed to judge debate")
            # Completed without a winner so the debate does not stay active
            await self._storage.set_debate_winner(
                debate.id, "", JUDGMENT_UNAVAILABLE.format(reason=reason)
            )
            await invalidate_debate(self._cache, debate.id)
            self._broadcaster.publish(
                debate.id, DebateEvent.error(debate.id, f"Judgment failed: {reason}")
            )
            return TickOutcome.JUDGMENT_FAILED

        winner_id = judgment.winner_id
        if winner_id not in (persona_a.id, persona_b.id):
            winner_id = ""
        summary = judgment.judgment_summary.strip() or JUDGMENT_UNAVAILABLE.format(
            reason="empty judgment"
        )

        await self._storage.set_debate_winner(debate.id, winner_id, summary)
        await invalidate_debate(self._cache, debate.id)
        self._broadcaster.publish(debate.id, DebateEvent.judgment(debate.id, winner_id, summary))
        return TickOutcome.JUDGED

    async def _fail_debate(self, debate_id: str, message: str) -> None:
        await self._storage.update_debate(debate_id, status=DebateStatus.ERROR)
        await invalidate_debate(self._cache, debate_id, include_arguments=False)
        self._broadcaster.publish(debate_id, DebateEvent.error(debate_id, message))
