"""Deletion of on-disk cache directories."""

from __future__ import annotations

import shutil
from pathlib import Path

from shardcache.utils.exceptions import RemovalError

from .results import ReclaimResult


def reclaim_directory(path: Path) -> ReclaimResult:
    """Recursively delete ``path`` if it exists.

    A symlinked root is unlinked rather than followed. Nothing is retried; a
    failed deletion leaves whatever could not be removed in place.

    Args:
        path: Shard- or index-level cache root

    Returns:
        Whether anything was deleted and, on failure, a ``RemovalError``
    """
    try:
        if not path.exists() and not path.is_symlink():
            return ReclaimResult(path)
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except FileNotFoundError as e:
        # Part of the tree went away concurrently
        if path.exists():
            return ReclaimResult(path, error=RemovalError(path, original_error=e))
        return ReclaimResult(path)
    except OSError as e:
        return ReclaimResult(path, error=RemovalError(path, original_error=e))

    return ReclaimResult(path, deleted=True)
