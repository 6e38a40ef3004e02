"""Result values returned by the cleanup leaf routines.

Leaf routines report failures as values instead of raising them. The
lifecycle listener is the only consumer and turns them into log events.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from shardcache.utils.exceptions import CleanupError


class CleanupPhase(str, Enum):
    """Step of a cleanup a failure happened in."""

    RESOLVE = "resolve"
    PURGE = "purge"
    RECLAIM = "reclaim"


@dataclass(frozen=True)
class PurgeResult:
    """Outcome of purging one directory's entries from the file cache.

    ``removed`` lists the keys handed to the cache before any failure; a
    failed purge keeps the removals it already made.
    """

    directory: Path
    removed: tuple[Path, ...] = ()
    error: CleanupError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ReclaimResult:
    """Outcome of deleting one cache directory tree."""

    path: Path
    deleted: bool = False
    error: CleanupError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
