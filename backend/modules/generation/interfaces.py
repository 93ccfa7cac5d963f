"""
Generation module interface.

The orchestrator depends on IContentGenerator only; tests substitute a
scripted generator.
"""

from typing import Protocol, runtime_checkable

from .models import Judgment, TranscriptEntry


@runtime_checkable
class IContentGenerator(Protocol):
    """Produces argument text and debate judgments."""

    async def generate_argument(
        self,
        topic: str,
        persona_name: str,
        persona_tone: str,
        persona_bias: str,
        prior_argument_lines: list[str],
        round_number: int,
    ) -> str:
        """
        Generate the next argument for a persona.

        Args:
            topic: Debate topic
            persona_name: Arguing persona's name
            persona_tone: Arguing persona's tone
            persona_bias: Arguing persona's ideological bias
            prior_argument_lines: Every earlier argument as "name: content",
                oldest first
            round_number: Current round (1-indexed)

        Returns:
            The argument text

        Raises:
            GenerationError: If the model call fails or is not configured
        """
        ...

    async def judge(
        self,
        topic: str,
        persona_a_name: str,
        persona_b_name: str,
        transcript: list[TranscriptEntry],
    ) -> Judgment:
        """
        Judge a finished debate.

        Returns:
            Judgment whose winner_id is persona A's or B's id, or "" when the
            declared winner matches neither name

        Raises:
            JudgmentError: If the model call fails or is not configured
        """
        ...
