"""LLM provider implementations."""

from .base import LLMProvider, ModelConfig
from .factory import get_providers, get_provider, get_api_key_for_provider

__all__ = [
    "LLMProvider",
    "ModelConfig",
    "get_providers",
    "get_provider",
    "get_api_key_for_provider",
]
