"""Factory functions for creating LLM providers."""

from shared.config import Settings

from .base import LLMProvider
from .openai_compatible import OpenAICompatibleProvider, PROVIDER_CONFIGS


def get_providers() -> dict[str, LLMProvider]:
    """Get one instance of each supported provider type.

    Returns:
        Dictionary mapping provider type names to provider instances.
    """
    return {name: OpenAICompatibleProvider(name) for name in PROVIDER_CONFIGS}


def get_provider(provider_type: str) -> LLMProvider:
    """Get the provider for a single type.

    Raises:
        KeyError: If provider_type is not recognized
    """
    return OpenAICompatibleProvider(provider_type)


def get_api_key_for_provider(provider_type: str, settings: Settings) -> str:
    """Get the API key for a provider from settings."""
    api_key_map = {
        "openai": settings.openai_api_key,
        "openrouter": settings.openrouter_api_key,
        # Local providers don't need API keys
        "ollama": "",
    }
    return api_key_map.get(provider_type, "")
