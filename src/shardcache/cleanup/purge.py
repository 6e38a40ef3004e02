"""Purging of file cache entries for a cache directory."""

from __future__ import annotations

import os
from pathlib import Path

from shardcache.filecache.protocols import FileCacheProtocol
from shardcache.utils.exceptions import CacheRemovalError, ListingError

from .results import PurgeResult


def canonical_path(path: Path) -> Path:
    """Resolve every symlink in ``path``.

    The file cache keys entries by the real location of a file, which can
    differ from the shard-path view when cache storage is symlinked or
    relocated.

    Raises:
        OSError: If the path or a link target does not exist
        RuntimeError: On a symlink loop (Python < 3.13)
    """
    return path.resolve(strict=True)


def purge_cache_entries(file_cache: FileCacheProtocol, directory: Path) -> PurgeResult:
    """Remove the cache entry of every immediate child of ``directory``.

    Cached artifacts sit flat in the directory, so the listing is not
    recursive. A missing directory means nothing was cached and is not an
    error. If the listing fails, any child cannot be canonicalized, or the
    cache fails to drop a key, the rest of the directory is abandoned.

    Args:
        file_cache: Cache to drop entries from
        directory: Directory whose children are cached files

    Returns:
        The keys removed and, on failure, a ``ListingError`` or
        ``CacheRemovalError``
    """
    try:
        entries = os.scandir(directory)
    except FileNotFoundError:
        return PurgeResult(directory)
    except OSError as e:
        return PurgeResult(directory, error=ListingError(directory, original_error=e))

    removed: list[Path] = []
    with entries:
        for entry in entries:
            child = directory / entry.name
            try:
                key = canonical_path(child)
            except (OSError, RuntimeError) as e:
                return PurgeResult(
                    directory,
                    tuple(removed),
                    ListingError(child, "cannot resolve real path", original_error=e),
                )
            try:
                file_cache.remove(key)
            except Exception as e:
                return PurgeResult(
                    directory, tuple(removed), CacheRemovalError(key, original_error=e)
                )
            removed.append(key)

    return PurgeResult(directory, tuple(removed))
