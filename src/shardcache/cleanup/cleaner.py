"""File cache cleanup on shard and index deletion.

``FileCacheCleaner`` is an index store listener that removes a shard's
entries from the node's file cache and deletes its cache directory just before
the storage layer deletes the shard. The cache would eventually evict those
entries on its own; this makes the cleanup deterministic instead.

Per directory the order is fixed: purge the cache entries, then delete the
directory. Failures are logged with the shard or index, storage mode and phase,
and never reach the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from shardcache.env.node_environment import NodeEnvironment
from shardcache.filecache.protocols import FileCacheProvider
from shardcache.models import (
    Index,
    IndexCacheLocation,
    IndexStorageConfig,
    ShardCacheLocation,
    ShardId,
    StorageMode,
)
from shardcache.utils.exceptions import (
    CacheUnavailableError,
    CleanupError,
    ShardCacheError,
)
from shardcache.utils.logging_utils import LogCallback, log_message

from .purge import purge_cache_entries
from .reclaim import reclaim_directory
from .results import CleanupPhase, PurgeResult, ReclaimResult

_MODE_LABELS = {
    StorageMode.REMOTE_SNAPSHOT: "remote snapshot",
    StorageMode.WARM: "warm index",
}


class FileCacheCleaner:
    """Index store listener that purges and deletes file cache state.

    The file cache is obtained through ``file_cache_provider`` each time a
    shard is purged, so the cleaner can be registered before the cache
    itself has been initialized.
    """

    def __init__(
        self,
        file_cache_provider: FileCacheProvider,
        log_callback: LogCallback | None = None,
    ) -> None:
        """Initialize the cleaner.

        Args:
            file_cache_provider: Returns the node's shared file cache, or
                ``None`` while it is not available
            log_callback: Optional observer for log messages
        """
        self.file_cache_provider = file_cache_provider
        self.log_callback = log_callback

    def _log(self, level: str, message: str, **context: Any) -> None:
        log_message(level, message, "FileCacheCleaner", self.log_callback, **context)

    def before_shard_path_deleted(
        self,
        shard_id: ShardId,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        """Purge the shard's cache entries and delete its cache directory.

        Args:
            shard_id: The shard about to be deleted
            index_settings: Storage settings of the shard's index
            node_env: Resolves the shard's on-disk locations
        """
        mode = index_settings.storage_mode
        if mode is StorageMode.NONE:
            return
        try:
            location = self._resolve_shard(shard_id, index_settings, node_env)
            if location is None:
                return
            layout = node_env.layout
            subfolder = (
                layout.local_store_dirname
                if mode is StorageMode.REMOTE_SNAPSHOT
                else layout.indices_folder
            )
            self._report_purge(location, self._purge(location.root / subfolder))
            self._report_reclaim(
                reclaim_directory(location.root),
                "Failed to delete cache path for shard",
                shard_id=str(shard_id),
                storage_mode=mode.value,
            )
        except Exception as e:
            self._log(
                "ERROR",
                "Unexpected error cleaning file cache before shard deletion",
                shard_id=str(shard_id),
                storage_mode=mode.value,
                error=str(e),
                exc_info=e,
            )

    def before_index_path_deleted(
        self,
        index: Index,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        """Delete the index-level cache directory.

        Cache entries were already purged shard by shard, so only the
        directory is removed here.

        Args:
            index: The index about to be deleted
            index_settings: Storage settings of the index
            node_env: Resolves the node's file cache path
        """
        mode = index_settings.storage_mode
        if mode is StorageMode.NONE:
            return
        try:
            location = self._resolve_index(index, mode, node_env)
            if location is None:
                return
            message = (
                "Failed to delete cache path for index"
                if mode is StorageMode.REMOTE_SNAPSHOT
                else "Failed to delete indices path in cache for index"
            )
            self._report_reclaim(
                reclaim_directory(location.root),
                message,
                index=str(index),
                storage_mode=mode.value,
            )
        except Exception as e:
            self._log(
                "ERROR",
                "Unexpected error cleaning file cache before index deletion",
                index=str(index),
                storage_mode=mode.value,
                error=str(e),
                exc_info=e,
            )

    def _resolve_shard(
        self,
        shard_id: ShardId,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> ShardCacheLocation | None:
        mode = index_settings.storage_mode
        try:
            if mode is StorageMode.REMOTE_SNAPSHOT:
                shard_path = node_env.load_file_cache_path(shard_id)
            else:
                shard_path = node_env.load_shard_path(
                    shard_id, index_settings.custom_data_path
                )
        except (ShardCacheError, OSError) as e:
            self._report_error(
                CleanupPhase.RESOLVE,
                f"Failed to resolve {_MODE_LABELS[mode]} shard file cache directory",
                e,
                shard_id=str(shard_id),
                storage_mode=mode.value,
            )
            return None

        if shard_path is None:
            self._log(
                "DEBUG",
                "Shard path not found, skipping file cache cleanup",
                shard_id=str(shard_id),
                storage_mode=mode.value,
            )
            return None
        return ShardCacheLocation(shard_id, mode, shard_path.data_path)

    def _resolve_index(
        self, index: Index, mode: StorageMode, node_env: NodeEnvironment
    ) -> IndexCacheLocation | None:
        try:
            node_path = node_env.file_cache_node_path()
        except (ShardCacheError, OSError) as e:
            self._report_error(
                CleanupPhase.RESOLVE,
                "Failed to resolve file cache node path",
                e,
                index=str(index),
                storage_mode=mode.value,
            )
            return None
        if mode is StorageMode.REMOTE_SNAPSHOT:
            root = node_path.file_cache_path / index.uuid
        else:
            root = node_path.indices_path / index.uuid
        return IndexCacheLocation(index, mode, root)

    def _purge(self, directory: Path) -> PurgeResult:
        try:
            file_cache = self.file_cache_provider()
        except Exception as e:
            return PurgeResult(directory, error=CacheUnavailableError(original_error=e))
        if file_cache is None:
            return PurgeResult(directory, error=CacheUnavailableError())
        return purge_cache_entries(file_cache, directory)

    def _report_purge(self, location: ShardCacheLocation, result: PurgeResult) -> None:
        context: dict[str, Any] = {
            "shard_id": str(location.shard_id),
            "storage_mode": location.storage_mode.value,
        }
        if result.error is not None:
            self._report_error(
                CleanupPhase.PURGE,
                "Error removing items from cache during "
                f"{_MODE_LABELS[location.storage_mode]} shard deletion",
                result.error,
                removed=len(result.removed),
                **context,
            )
            return
        self._log(
            "DEBUG",
            "Purged file cache entries",
            path=str(result.directory),
            removed=len(result.removed),
            **context,
        )

    def _report_reclaim(self, result: ReclaimResult, message: str, **context: Any) -> None:
        if result.error is not None:
            self._report_error(CleanupPhase.RECLAIM, message, result.error, **context)
            return
        if result.deleted:
            self._log("DEBUG", "Deleted file cache directory", path=str(result.path), **context)

    def _report_error(
        self, phase: CleanupPhase, message: str, error: Exception, **context: Any
    ) -> None:
        if isinstance(error, CleanupError):
            context.setdefault("path", str(error.path) if error.path else None)
        self._log(
            "ERROR",
            message,
            phase=phase.value,
            error=str(error),
            error_code=getattr(error, "error_code", None),
            **context,
        )
