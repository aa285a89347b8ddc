"""Process-lifetime cache for per-symbol sequences."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class CacheBackend(ABC, Generic[T]):
    """Abstract per-symbol cache interface."""

    @abstractmethod
    def get(self, symbol: str) -> tuple[T, ...] | None:
        """Return the cached sequence, or None on miss."""
        ...

    @abstractmethod
    def store(self, symbol: str, items: tuple[T, ...]) -> None:
        """Store a sequence for ``symbol``, replacing any previous entry."""
        ...

    @abstractmethod
    def has(self, symbol: str) -> bool:
        ...

    @abstractmethod
    def symbols(self) -> list[str]:
        ...

    @abstractmethod
    def clear(self, symbol: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...


class MemoryCache(CacheBackend[T]):
    """In-memory cache keyed by symbol exactly as supplied.

    Entries never expire and are never evicted; ``clear`` and
    ``clear_all`` are the only ways to drop them.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[T, ...]] = {}
        self._lock = threading.Lock()

    def get(self, symbol: str) -> tuple[T, ...] | None:
        with self._lock:
            return self._store.get(symbol)

    def store(self, symbol: str, items: tuple[T, ...]) -> None:
        with self._lock:
            self._store[symbol] = tuple(items)

    def has(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._store

    def symbols(self) -> list[str]:
        with self._lock:
            return list(self._store)

    def clear(self, symbol: str) -> None:
        with self._lock:
            self._store.pop(symbol, None)

    def clear_all(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
