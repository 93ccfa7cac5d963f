"""
Centralized configuration for the Debatrix backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., SUPABASE_*, LLM_*, REDIS_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Debatrix API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (durable storage). Leave empty to use in-memory storage.
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URI, migrations only

    # Redis (cache). Leave empty to use the in-process cache.
    redis_url: str = ""

    # Content generation
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_api_base: str = ""
    openai_api_key: str = ""
    openrouter_api_key: str = ""
    argument_max_tokens: int = 512
    judgment_max_tokens: int = 1024

    # Orchestrator pacing, in seconds
    initial_tick_delay: float = 2.0
    argument_tick_delay: float = 3.0
    round_tick_delay: float = 2.0
    resume_tick_delay: float = 1.0
    skip_tick_delay: float = 0.5

    # Debate limits
    default_total_rounds: int = 3
    max_total_rounds: int = 10

    # Cache TTLs, in seconds
    debate_cache_ttl: int = 60
    debate_list_cache_ttl: int = 60
    arguments_cache_ttl: int = 30


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
