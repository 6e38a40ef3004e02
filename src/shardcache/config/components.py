"""Component-specific configuration dataclasses.

This module provides focused configuration classes for the node layout and
logging, so components can be configured and tested in isolation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileCacheLayout:
    """Directory names making up the node's file cache layout.

    Attributes:
        file_cache_dirname: File cache directory under a node path; holds
            remote-snapshot shard caches as ``<index uuid>/<shard num>``
        indices_dirname: Indices directory under a node path; holds warm
            shard data as ``<index uuid>/<shard num>``
        local_store_dirname: Subdirectory of a remote-snapshot shard cache
            holding the locally cached block files
        indices_folder: Subdirectory of a warm shard holding its index files
    """

    file_cache_dirname: str = "cache"
    indices_dirname: str = "indices"
    local_store_dirname: str = "RemoteLocalStore"
    indices_folder: str = "index"


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for log output.

    Attributes:
        level: Logging level
        json_logs: Render logs as JSON instead of aligned columns
        log_file: Optional file to write logs to in addition to stderr
    """

    level: int = logging.INFO
    json_logs: bool = False
    log_file: str | None = None


@dataclass(frozen=True)
class NodeConfig:
    """Configuration for the node's data paths.

    Attributes:
        data_paths: Node data directories, in order
        file_cache_path_index: Which data path hosts the file cache
        shared_data_path: Root for indices configured with a custom data path
        node_id: Directory under a custom data path holding this node's data
        layout: File cache directory names
    """

    data_paths: tuple[str, ...]
    file_cache_path_index: int = 0
    shared_data_path: str | None = None
    node_id: int = 0
    layout: FileCacheLayout = field(default_factory=FileCacheLayout)
