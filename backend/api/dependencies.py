"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The storage backend, cache, broadcast channel, content generator and
orchestrator are shared by every service in one container, so all of them
see the same debates and the same live subscribers.
"""

from typing import TYPE_CHECKING, Optional

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.cache import ICache
    from shared.config import Settings
    from modules.analytics.service import AnalyticsService
    from modules.debates.broadcast import BroadcastChannel
    from modules.debates.interfaces import IDebateService
    from modules.debates.orchestrator import DebateOrchestrator
    from modules.generation.interfaces import IContentGenerator
    from modules.personas.interfaces import IPersonaService
    from modules.storage.interfaces import IStorage
    from modules.votes.interfaces import IVoteLedger


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    Tests can pass their own storage, cache or generator; anything not
    passed falls back to the configured singleton.
    """

    def __init__(
        self,
        settings: "Optional[Settings]" = None,
        storage: "Optional[IStorage]" = None,
        cache: "Optional[ICache]" = None,
        generator: "Optional[IContentGenerator]" = None,
    ) -> None:
        self._settings = settings
        self._storage = storage
        self._cache = cache
        self._generator = generator
        self._broadcaster: "BroadcastChannel | None" = None
        self._orchestrator: "DebateOrchestrator | None" = None
        self._debate_service: "IDebateService | None" = None
        self._vote_ledger: "IVoteLedger | None" = None
        self._persona_service: "IPersonaService | None" = None
        self._analytics_service: "AnalyticsService | None" = None

    @property
    def settings(self) -> "Settings":
        if self._settings is None:
            from shared.config import get_settings
            self._settings = get_settings()
        return self._settings

    @property
    def storage(self) -> "IStorage":
        """Get the storage backend."""
        if self._storage is None:
            from modules.storage import get_storage
            self._storage = get_storage()
        return self._storage

    @property
    def cache(self) -> "ICache":
        """Get the cache backend."""
        if self._cache is None:
            from shared.cache import get_cache
            self._cache = get_cache()
        return self._cache

    @property
    def generator(self) -> "IContentGenerator":
        """Get the content generator."""
        if self._generator is None:
            from modules.generation.service import get_content_generator
            self._generator = get_content_generator()
        return self._generator

    @property
    def broadcaster(self) -> "BroadcastChannel":
        """Get the debate event broadcast channel."""
        if self._broadcaster is None:
            from modules.debates.broadcast import BroadcastChannel
            self._broadcaster = BroadcastChannel()
        return self._broadcaster

    @property
    def orchestrator(self) -> "DebateOrchestrator":
        """Get the debate orchestrator."""
        if self._orchestrator is None:
            from modules.debates.orchestrator import DebateOrchestrator
            self._orchestrator = DebateOrchestrator(
                storage=self.storage,
                generator=self.generator,
                cache=self.cache,
                broadcaster=self.broadcaster,
                settings=self.settings,
            )
        return self._orchestrator

    @property
    def debates(self) -> "IDebateService":
        """Get the debate service instance."""
        if self._debate_service is None:
            from modules.debates.service import DebateService
            self._debate_service = DebateService(
                storage=self.storage,
                cache=self.cache,
                broadcaster=self.broadcaster,
                orchestrator=self.orchestrator,
                settings=self.settings,
            )
        return self._debate_service

    @property
    def votes(self) -> "IVoteLedger":
        """Get the vote ledger instance."""
        if self._vote_ledger is None:
            from modules.votes.service import VoteLedger
            self._vote_ledger = VoteLedger(storage=self.storage, cache=self.cache)
        return self._vote_ledger

    @property
    def personas(self) -> "IPersonaService":
        """Get the persona service instance."""
        if self._persona_service is None:
            from modules.personas.service import PersonaService
            self._persona_service = PersonaService(storage=self.storage, cache=self.cache)
        return self._persona_service

    @property
    def analytics(self) -> "AnalyticsService":
        """Get the analytics service instance."""
        if self._analytics_service is None:
            from modules.analytics.service import AnalyticsService
            self._analytics_service = AnalyticsService(storage=self.storage)
        return self._analytics_service

    async def shutdown(self) -> None:
        """Stop scheduled debate ticks and wait for running ones."""
        if self._orchestrator is not None:
            await self._orchestrator.shutdown()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._broadcaster = None
        self._orchestrator = None
        self._debate_service = None
        self._vote_ledger = None
        self._persona_service = None
        self._analytics_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Replace the service container (for testing)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_debate_service() -> "IDebateService":
    """FastAPI dependency for debate service."""
    return get_container().debates


def get_vote_ledger() -> "IVoteLedger":
    """FastAPI dependency for vote ledger."""
    return get_container().votes


def get_persona_service() -> "IPersonaService":
    """FastAPI dependency for persona service."""
    return get_container().personas


def get_analytics_service() -> "AnalyticsService":
    """FastAPI dependency for analytics service."""
    return get_container().analytics
