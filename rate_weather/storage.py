"""Key-value storage backends for the expiring cache.

Stores hold opaque text values and never expire anything on their own.
Failures surface as ``CacheError`` so the cache layer can treat storage
as advisory.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from rate_weather.database.models import CacheEntryRecord
from rate_weather.utils.errors import CacheError


class KeyValueStore(ABC):
    """Storage capability used by ``ExpiringCache``."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""


class MemoryStore(KeyValueStore):
    """Thread-safe in-process store."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class SqlStore(KeyValueStore):
    """Store backed by the ``cache_entries`` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                return session.scalar(
                    select(CacheEntryRecord.value).where(CacheEntryRecord.key == key)
                )
        except SQLAlchemyError as e:
            raise CacheError(f"Failed to read cache key {key}: {e}")

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as session:
                session.merge(
                    CacheEntryRecord(
                        key=key,
                        value=value,
                        updated_at=datetime.now(timezone.utc).replace(tzinfo=None),
                    )
                )
                session.commit()
        except SQLAlchemyError as e:
            raise CacheError(f"Failed to write cache key {key}: {e}")

    def delete(self, key: str) -> None:
        try:
            with self._session_factory() as session:
                session.execute(delete(CacheEntryRecord).where(CacheEntryRecord.key == key))
                session.commit()
        except SQLAlchemyError as e:
            raise CacheError(f"Failed to delete cache key {key}: {e}")

    def clear(self) -> None:
        try:
            with self._session_factory() as session:
                session.execute(delete(CacheEntryRecord))
                session.commit()
        except SQLAlchemyError as e:
            raise CacheError(f"Failed to clear cache: {e}")


def create_store(backend: str = "memory") -> KeyValueStore:
    """Build the store named by ``cache.backend``."""
    if backend == "memory":
        return MemoryStore()
    if backend == "sql":
        from rate_weather.database.connection import create_tables, get_session_factory

        create_tables()
        return SqlStore(get_session_factory())
    raise ValueError(f"Unknown cache backend: {backend}")
