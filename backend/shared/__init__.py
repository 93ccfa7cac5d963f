"""
Shared infrastructure for Debatrix backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- cache: Read-through cache backends and invalidation helpers
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, has_database, reset_client_cache
from .cache import (
    ICache,
    NullCache,
    InMemoryCache,
    RedisCache,
    get_cache,
    reset_cache,
    invalidate_debate,
)
from .exceptions import (
    DebatrixError,
    NotFoundError,
    ValidationError,
    InvalidTransitionError,
    ConflictError,
    ExternalServiceError,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "has_database",
    "reset_client_cache",
    "ICache",
    "NullCache",
    "InMemoryCache",
    "RedisCache",
    "get_cache",
    "reset_cache",
    "invalidate_debate",
    "DebatrixError",
    "NotFoundError",
    "ValidationError",
    "InvalidTransitionError",
    "ConflictError",
    "ExternalServiceError",
]
