"""
Storage module.

Persistence for personas, debates, arguments and votes behind a single
interface with two interchangeable backends.

Public API:
- IStorage: Storage interface
- InMemoryStorage: Dict-backed backend (tests, no database configured)
- SupabaseStorage: Durable Supabase backend
- get_storage / reset_storage: Backend singleton
"""

import logging
from typing import Optional

from shared.database import get_supabase_client, has_database

from .interfaces import IStorage
from .memory import InMemoryStorage
from .repository import SupabaseStorage

logger = logging.getLogger(__name__)

_storage_instance: Optional[IStorage] = None


def get_storage() -> IStorage:
    """
    Get the storage singleton.

    Uses Supabase when it is configured, otherwise in-memory storage.
    """
    global _storage_instance
    if _storage_instance is None:
        if has_database():
            _storage_instance = SupabaseStorage(get_supabase_client())
        else:
            _storage_instance = InMemoryStorage()
        logger.info("Using %s storage", _storage_instance.name)
    return _storage_instance


def reset_storage() -> None:
    """Reset the storage singleton (for testing)."""
    global _storage_instance
    _storage_instance = None


__all__ = [
    "IStorage",
    "InMemoryStorage",
    "SupabaseStorage",
    "get_storage",
    "reset_storage",
]
