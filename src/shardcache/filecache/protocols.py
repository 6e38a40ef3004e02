"""Protocol definitions for the node's file cache."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class FileCacheProtocol(Protocol):
    """Protocol for the node's shared file cache.

    The cache is owned and initialized elsewhere; the cleanup coordinator only
    asks it to forget entries. Implementations must tolerate concurrent calls
    from several deletion threads.
    """

    def remove(self, path: Path) -> None:
        """Drop the entry keyed by ``path``.

        Args:
            path: Canonical (symlink-free) path of a cached file. Removing a
                key that is not cached is a no-op.
        """
        ...


# Lazily resolves the shared cache; returns None while the cache is not up.
FileCacheProvider: TypeAlias = Callable[[], FileCacheProtocol | None]
