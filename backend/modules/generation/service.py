"""
Content generator backed by a LangChain chat model.

Argument generation and judging are single request/response calls; the
debate orchestrator paces them, so nothing here streams.
"""

import logging
import re
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from providers.base import LLMProvider, ModelConfig
from providers.factory import get_provider, get_api_key_for_provider
from shared.config import Settings, get_settings

from .exceptions import GenerationError, JudgmentError
from .interfaces import IContentGenerator
from .models import Judgment, TranscriptEntry
from .prompts import build_argument_prompts, build_judge_prompts

logger = logging.getLogger(__name__)

FALLBACK_ARGUMENT = "I have no argument at this time."

WINNER_PATTERN = re.compile(r"WINNER:\s*(.+?)(?:\n|$)", re.IGNORECASE)
JUDGMENT_PATTERN = re.compile(r"JUDGMENT:\s*([\s\S]+)", re.IGNORECASE)


def message_text(message: Any) -> str:
    """Extract plain text from a chat model response."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content.strip()
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts).strip()


def _persona_id_for(name: str, transcript: list[TranscriptEntry]) -> str:
    for entry in transcript:
        if entry.persona_name == name:
            return entry.persona_id
    return ""


def parse_judgment(
    response: str,
    persona_a_name: str,
    persona_b_name: str,
    transcript: list[TranscriptEntry],
) -> Judgment:
    """
    Parse a ``WINNER: ... / JUDGMENT: ...`` response.

    The declared winner is matched by case-insensitive substring against
    persona A's name first, then persona B's. Persona ids come from the
    transcript. When neither name matches, winner_id is "". When there is no
    JUDGMENT section the whole response is the summary.
    """
    winner_match = WINNER_PATTERN.search(response)
    judgment_match = JUDGMENT_PATTERN.search(response)

    winner_name = winner_match.group(1).strip().lower() if winner_match else ""

    winner_id = ""
    if winner_name and persona_a_name.lower() in winner_name:
        winner_id = _persona_id_for(persona_a_name, transcript)
    elif winner_name and persona_b_name.lower() in winner_name:
        winner_id = _persona_id_for(persona_b_name, transcript)

    summary = judgment_match.group(1).strip() if judgment_match else response.strip()
    return Judgment(winner_id=winner_id, judgment_summary=summary)


class LLMContentGenerator(IContentGenerator):
    """
    IContentGenerator over an OpenAI-compatible chat model.

    The LangChain client is created per call, so a missing API key surfaces
    as a GenerationError on the debate rather than at startup.
    """

    def __init__(
        self,
        provider: LLMProvider,
        argument_model: ModelConfig,
        judgment_model: ModelConfig,
    ):
        self._provider = provider
        self._argument_model = argument_model
        self._judgment_model = judgment_model

    async def generate_argument(
        self,
        topic: str,
        persona_name: str,
        persona_tone: str,
        persona_bias: str,
        prior_argument_lines: list[str],
        round_number: int,
    ) -> str:
        system_prompt, user_prompt = build_argument_prompts(
            topic,
            persona_name,
            persona_tone,
            persona_bias,
            prior_argument_lines,
            round_number,
        )
        try:
            llm = self._provider.get_llm(self._argument_model)
            response = await llm.ainvoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ])
        except Exception as e:
            raise GenerationError(
                f"Failed to generate argument: {e}",
                provider=self._argument_model.provider_type,
                original_error=repr(e),
            ) from e

        content = message_text(response)
        if not content:
            logger.warning("Empty argument from model for %s, using fallback", persona_name)
            return FALLBACK_ARGUMENT
        return content

    async def judge(
        self,
        topic: str,
        persona_a_name: str,
        persona_b_name: str,
        transcript: list[TranscriptEntry],
    ) -> Judgment:
        system_prompt, user_prompt = build_judge_prompts(
            topic, persona_a_name, persona_b_name, transcript
        )
        try:
            llm = self._provider.get_llm(self._judgment_model)
            response = await llm.ainvoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ])
        except Exception as e:
            raise JudgmentError(
                f"Failed to judge debate: {e}",
                provider=self._judgment_model.provider_type,
                original_error=repr(e),
            ) from e

        text = message_text(response)
        if not text:
            raise JudgmentError(
                "Judge returned an empty response",
                provider=self._judgment_model.provider_type,
            )
        return parse_judgment(text, persona_a_name, persona_b_name, transcript)


def build_content_generator(settings: Settings) -> LLMContentGenerator:
    """Create an LLMContentGenerator from settings."""
    provider = get_provider(settings.llm_provider)
    api_key = get_api_key_for_provider(settings.llm_provider, settings)

    def model(max_tokens: int) -> ModelConfig:
        return ModelConfig(
            provider_type=settings.llm_provider,
            model_id=settings.llm_model,
            api_base=settings.llm_api_base,
            api_key=api_key,
            max_tokens=max_tokens,
        )

    return LLMContentGenerator(
        provider=provider,
        argument_model=model(settings.argument_max_tokens),
        judgment_model=model(settings.judgment_max_tokens),
    )


# Module-level instance getter
_generator_instance: Optional[IContentGenerator] = None


def get_content_generator() -> IContentGenerator:
    """Get the content generator singleton."""
    global _generator_instance
    if _generator_instance is None:
        _generator_instance = build_content_generator(get_settings())
    return _generator_instance


def reset_content_generator() -> None:
    """Reset the content generator singleton (for testing)."""
    global _generator_instance
    _generator_instance = None
