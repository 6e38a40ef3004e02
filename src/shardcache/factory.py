"""Wiring of the cleanup coordinator's components.

The storage layer owns the file cache and the lifecycle dispatcher; these
helpers build the pieces this package provides and register them explicitly.
"""

from __future__ import annotations

from shardcache.cleanup.cleaner import FileCacheCleaner
from shardcache.cleanup.listener import CompositeIndexStoreListener
from shardcache.config import ShardCacheConfig
from shardcache.env.node_environment import NodeEnvironment
from shardcache.filecache.protocols import FileCacheProvider
from shardcache.utils.logging_utils import LogCallback, setup_logging


def build_node_environment(config: ShardCacheConfig) -> NodeEnvironment:
    """Create the node environment described by ``config``."""
    node = config.node
    return NodeEnvironment(
        node.data_paths,
        layout=node.layout,
        file_cache_path_index=node.file_cache_path_index,
        shared_data_path=node.shared_data_path,
        node_id=node.node_id,
    )


def build_file_cache_cleaner(
    file_cache_provider: FileCacheProvider,
    log_callback: LogCallback | None = None,
) -> FileCacheCleaner:
    """Create a cleaner bound to the node's lazily-resolved file cache."""
    return FileCacheCleaner(file_cache_provider, log_callback=log_callback)


def register_file_cache_cleaner(
    dispatcher: CompositeIndexStoreListener,
    file_cache_provider: FileCacheProvider,
    log_callback: LogCallback | None = None,
) -> FileCacheCleaner:
    """Create a cleaner and register it with the lifecycle dispatcher.

    Returns:
        The registered cleaner
    """
    cleaner = build_file_cache_cleaner(file_cache_provider, log_callback)
    dispatcher.register(cleaner)
    return cleaner


def configure_logging(config: ShardCacheConfig) -> None:
    """Apply the logging section of ``config``."""
    log_config = config.logging_config
    setup_logging(
        log_file=log_config.log_file,
        log_level=log_config.level,
        json_logs=log_config.json_logs,
    )
