"""Configuration package for the shard cache cleanup coordinator."""

from .components import FileCacheLayout, LoggingConfig, NodeConfig

# Import after components to avoid circular import
from .main import ShardCacheConfig

__all__ = [
    "FileCacheLayout",
    "LoggingConfig",
    "NodeConfig",
    "ShardCacheConfig",
]
