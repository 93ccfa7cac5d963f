"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from fastapi.testclient import TestClient

from shared.cache import InMemoryCache, reset_cache
from shared.config import Settings, get_settings
from shared.database import reset_client_cache
from modules.debates.broadcast import BroadcastChannel
from modules.debates.orchestrator import DebateOrchestrator
from modules.generation.exceptions import GenerationError, JudgmentError
from modules.generation.models import Judgment, TranscriptEntry
from modules.generation.service import reset_content_generator
from modules.storage import InMemoryStorage, reset_storage
from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container


class FakeContentGenerator:
    """
    Deterministic IContentGenerator for tests.

    Arguments read "<name> argues round <n>". The judge names the persona of
    the first transcript entry as the winner unless ``winner_id`` is set.
    """

    def __init__(self) -> None:
        self.argument_calls: list[dict] = []
        self.judge_calls: list[dict] = []
        self.fail_argument = False
        self.fail_judgment = False
        self.winner_id: str | None = None

    async def generate_argument(
        self,
        topic: str,
        persona_name: str,
        persona_tone: str,
        persona_bias: str,
        prior_argument_lines: list[str],
        round_number: int,
    ) -> str:
        self.argument_calls.append({
            "topic": topic,
            "persona_name": persona_name,
            "persona_tone": persona_tone,
            "persona_bias": persona_bias,
            "prior_argument_lines": list(prior_argument_lines),
            "round_number": round_number,
        })
        if self.fail_argument:
            raise GenerationError("model unavailable")
        return f"{persona_name} argues round {round_number}"

    async def judge(
        self,
        topic: str,
        persona_a_name: str,
        persona_b_name: str,
        transcript: list[TranscriptEntry],
    ) -> Judgment:
        self.judge_calls.append({
            "topic": topic,
            "persona_a_name": persona_a_name,
            "persona_b_name": persona_b_name,
            "transcript": list(transcript),
        })
        if self.fail_judgment:
            raise JudgmentError("judge unavailable")
        if self.winner_id is not None:
            winner_id = self.winner_id
        else:
            winner_id = transcript[0].persona_id if transcript else ""
        return Judgment(winner_id=winner_id, judgment_summary="A clear and reasoned win.")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module-level singletons before and after each test."""
    def reset():
        get_settings.cache_clear()
        reset_client_cache()
        reset_storage()
        reset_cache()
        reset_content_generator()
        reset_container()

    reset()
    yield
    reset()


@pytest.fixture
def settings() -> Settings:
    """
    Settings whose tick delays are long enough never to fire during a test.

    Tests drive debates by calling tick() directly.
    """
    return Settings(
        supabase_url="",
        supabase_service_role_key="",
        redis_url="",
        initial_tick_delay=3600,
        argument_tick_delay=3600,
        round_tick_delay=3600,
        resume_tick_delay=3600,
        skip_tick_delay=3600,
    )


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with near-zero tick delays, for debates that run on their own."""
    return Settings(
        supabase_url="",
        supabase_service_role_key="",
        redis_url="",
        initial_tick_delay=0.01,
        argument_tick_delay=0.01,
        round_tick_delay=0.01,
        resume_tick_delay=0.01,
        skip_tick_delay=0.01,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def broadcaster() -> BroadcastChannel:
    return BroadcastChannel()


@pytest.fixture
def generator() -> FakeContentGenerator:
    return FakeContentGenerator()


@pytest.fixture
def orchestrator(storage, generator, cache, broadcaster, settings) -> DebateOrchestrator:
    return DebateOrchestrator(
        storage=storage,
        generator=generator,
        cache=cache,
        broadcaster=broadcaster,
        settings=settings,
    )


@pytest.fixture
def create_debate(storage):
    """Factory that stores two personas and an active debate between them."""
    async def _create(total_rounds: int = 1, topic: str = "Should cities ban cars?"):
        persona_a = await storage.create_persona("Alice", "measured", "progressive")
        persona_b = await storage.create_persona("Bob", "combative", "conservative")
        debate = await storage.create_debate(topic, persona_a.id, persona_b.id, total_rounds)
        return debate, persona_a, persona_b

    return _create


@pytest.fixture
def container(storage, cache, generator, settings) -> ServiceContainer:
    """Service container over the in-memory fixtures, installed as the app's container."""
    container = ServiceContainer(
        settings=settings,
        storage=storage,
        cache=cache,
        generator=generator,
    )
    set_container(container)
    return container


@pytest.fixture
def client(container):
    """TestClient for a fresh app; the lifespan stops the orchestrator on exit."""
    with TestClient(create_app()) as test_client:
        yield test_client
