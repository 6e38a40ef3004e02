"""Index store lifecycle listeners.

The storage layer notifies listeners synchronously before it physically
removes a shard or index directory. Listeners are registered explicitly at
startup; their outcome never blocks the deletion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from shardcache.utils.logging_utils import LogCallback, log_message

if TYPE_CHECKING:
    from shardcache.env.node_environment import NodeEnvironment
    from shardcache.models import Index, IndexStorageConfig, ShardId


@runtime_checkable
class IndexStoreListener(Protocol):
    """Callbacks invoked before shard and index paths are deleted."""

    def before_shard_path_deleted(
        self,
        shard_id: ShardId,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        """Called before the shard's path is deleted from disk."""
        ...

    def before_index_path_deleted(
        self,
        index: Index,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        """Called before the index's path is deleted from disk."""
        ...


class NoopIndexStoreListener:
    """Listener that ignores every notification."""

    def before_shard_path_deleted(
        self,
        shard_id: ShardId,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        return None

    def before_index_path_deleted(
        self,
        index: Index,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        return None


NOOP_LISTENER: IndexStoreListener = NoopIndexStoreListener()


class CompositeIndexStoreListener:
    """Fans notifications out to registered listeners in registration order.

    A listener that raises is logged and skipped so the remaining listeners
    still run and the caller can go ahead with the deletion.
    """

    def __init__(
        self,
        listeners: list[IndexStoreListener] | None = None,
        log_callback: LogCallback | None = None,
    ) -> None:
        self._listeners: list[IndexStoreListener] = list(listeners or [])
        self.log_callback = log_callback

    def register(self, listener: IndexStoreListener) -> None:
        """Register a listener to be notified of future deletions."""
        if not isinstance(listener, IndexStoreListener):
            raise TypeError(f"{type(listener).__name__} is not an IndexStoreListener")
        self._listeners.append(listener)

    @property
    def listeners(self) -> tuple[IndexStoreListener, ...]:
        return tuple(self._listeners)

    def before_shard_path_deleted(
        self,
        shard_id: ShardId,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        for listener in self._listeners:
            try:
                listener.before_shard_path_deleted(shard_id, index_settings, node_env)
            except Exception as e:
                log_message(
                    "ERROR",
                    "Index store listener failed before shard path deletion",
                    "IndexStoreListener",
                    self.log_callback,
                    listener=type(listener).__name__,
                    shard_id=str(shard_id),
                    error=str(e),
                    exc_info=e,
                )

    def before_index_path_deleted(
        self,
        index: Index,
        index_settings: IndexStorageConfig,
        node_env: NodeEnvironment,
    ) -> None:
        for listener in self._listeners:
            try:
                listener.before_index_path_deleted(index, index_settings, node_env)
            except Exception as e:
                log_message(
                    "ERROR",
                    "Index store listener failed before index path deletion",
                    "IndexStoreListener",
                    self.log_callback,
                    listener=type(listener).__name__,
                    index=str(index),
                    error=str(e),
                    exc_info=e,
                )
