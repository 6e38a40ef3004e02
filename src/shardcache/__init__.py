"""Shard and index file-cache cleanup coordinator.

This package keeps a node's local file cache consistent with shard and index
deletion: before a shard or index directory is deleted, its cache entries are
purged and its cache directories removed.
"""

from .cleanup import CompositeIndexStoreListener, FileCacheCleaner, IndexStoreListener
from .config import ShardCacheConfig
from .env import NodeEnvironment
from .models import Index, IndexStorageConfig, ShardId, StorageMode

__all__ = [
    "CompositeIndexStoreListener",
    "FileCacheCleaner",
    "Index",
    "IndexStorageConfig",
    "IndexStoreListener",
    "NodeEnvironment",
    "ShardCacheConfig",
    "ShardId",
    "StorageMode",
]
