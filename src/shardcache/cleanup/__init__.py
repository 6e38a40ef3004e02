"""Cache cleanup: lifecycle listeners, cache purge and directory reclaim."""

from .cleaner import FileCacheCleaner
from .listener import (
    NOOP_LISTENER,
    CompositeIndexStoreListener,
    IndexStoreListener,
    NoopIndexStoreListener,
)
from .purge import canonical_path, purge_cache_entries
from .reclaim import reclaim_directory
from .results import CleanupPhase, PurgeResult, ReclaimResult

__all__ = [
    "NOOP_LISTENER",
    "CleanupPhase",
    "CompositeIndexStoreListener",
    "FileCacheCleaner",
    "IndexStoreListener",
    "NoopIndexStoreListener",
    "PurgeResult",
    "ReclaimResult",
    "canonical_path",
    "purge_cache_entries",
    "reclaim_directory",
]
