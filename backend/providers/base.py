"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod

from langchain_openai import ChatOpenAI
from pydantic import BaseModel


class ModelConfig(BaseModel):
    """Configuration for a chat model.

    Attributes:
        provider_type: Provider name (e.g., "openai", "ollama")
        model_id: Model identifier (e.g., "gpt-4o-mini")
        api_base: Base URL for the API endpoint (empty for provider default)
        api_key: API key (empty string for local servers)
        max_tokens: Completion token cap, or None for the provider default
    """

    model_config = {"frozen": True}

    provider_type: str
    model_id: str
    api_base: str = ""
    api_key: str = ""
    max_tokens: int | None = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Every supported provider speaks the OpenAI chat API, so implementations
    are thin wrappers around ChatOpenAI with provider-specific defaults.
    """

    @abstractmethod
    def get_llm(self, config: ModelConfig) -> ChatOpenAI:
        """Return a configured LLM client for the given model.

        Raises:
            ValueError: If the provider needs an API key and none is set
        """
        pass
