"""
Base repository class for Supabase-backed storage.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Subclasses get the client as ``self._db`` and are responsible for
    mapping rows to pydantic models. The type parameter names the primary
    model the repository returns.
    """

    def __init__(self, db: Client) -> None:
        self._db = db
