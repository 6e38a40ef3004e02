"""Fake implementations for testing file cache consumers."""

from __future__ import annotations

import threading
from pathlib import Path

from .protocols import FileCacheProtocol


class InMemoryFileCache(FileCacheProtocol):
    """In-memory file cache for testing.

    Tracks cached keys in a set guarded by a lock, and records every
    ``remove`` call so tests can assert on exactly what was purged.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: set[Path] = set()
        self.removed: list[Path] = []

    def put(self, path: Path | str) -> Path:
        """Cache a file under its canonical path and return the key."""
        key = Path(path).resolve()
        with self._lock:
            self._entries.add(key)
        return key

    def remove(self, path: Path) -> None:
        with self._lock:
            self.removed.append(path)
            self._entries.discard(path)

    def contains(self, path: Path | str) -> bool:
        with self._lock:
            return Path(path) in self._entries

    def keys(self) -> set[Path]:
        with self._lock:
            return set(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
