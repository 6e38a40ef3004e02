"""Node path resolution.

Maps index and shard identities onto the node's data directories. The
cleanup coordinator only reads these paths; creating and locking them is the
storage layer's business.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from shardcache.config.components import FileCacheLayout
from shardcache.models import Index, ShardId, ShardPath
from shardcache.utils.exceptions import ShardPathResolutionError


@dataclass(frozen=True)
class NodePath:
    """One node data directory and the well-known directories beneath it."""

    path: Path
    indices_path: Path
    file_cache_path: Path

    @classmethod
    def for_root(cls, path: Path | str, layout: FileCacheLayout) -> NodePath:
        root = Path(path)
        return cls(
            path=root,
            indices_path=root / layout.indices_dirname,
            file_cache_path=root / layout.file_cache_dirname,
        )

    def resolve_index(self, index: Index) -> Path:
        return self.indices_path / index.uuid


class NodeEnvironment:
    """Resolves on-disk locations for indices and shards on this node."""

    def __init__(
        self,
        data_paths: Sequence[Path | str],
        *,
        layout: FileCacheLayout | None = None,
        file_cache_path_index: int = 0,
        shared_data_path: Path | str | None = None,
        node_id: int = 0,
    ) -> None:
        """Initialize the node environment.

        Args:
            data_paths: Node data directories, in order
            layout: File cache directory names
            file_cache_path_index: Which data path hosts the file cache
            shared_data_path: Root for indices with a custom data path
            node_id: Directory under a custom data path holding this node's data
        """
        if not data_paths:
            raise ValueError("At least one data path is required")
        self.layout = layout or FileCacheLayout()
        self._node_paths = [NodePath.for_root(p, self.layout) for p in data_paths]
        self._file_cache_node_path = self._node_paths[file_cache_path_index]
        self.shared_data_path = Path(shared_data_path) if shared_data_path else None
        self.node_id = node_id

    def node_paths(self) -> list[NodePath]:
        return list(self._node_paths)

    def file_cache_node_path(self) -> NodePath:
        """Return the node path that hosts the file cache."""
        return self._file_cache_node_path

    def available_shard_paths(self, shard_id: ShardId) -> list[Path]:
        """Return every location the shard could live in on this node."""
        return [
            node_path.resolve_index(shard_id.index) / str(shard_id.shard_num)
            for node_path in self._node_paths
        ]

    def resolve_custom_location(self, custom_data_path: str, shard_id: ShardId) -> Path:
        """Return the shard directory under an index's custom data path."""
        root = Path(custom_data_path)
        if not root.is_absolute() and self.shared_data_path is not None:
            root = self.shared_data_path / root
        return root / str(self.node_id) / shard_id.index.uuid / str(shard_id.shard_num)

    def load_file_cache_path(self, shard_id: ShardId) -> ShardPath:
        """Return the shard's location inside the file cache.

        The location is computed, never probed, so it is returned even when
        nothing has been cached for the shard yet.
        """
        path = (
            self._file_cache_node_path.file_cache_path
            / shard_id.index.uuid
            / str(shard_id.shard_num)
        )
        return ShardPath(shard_id=shard_id, data_path=path, shard_state_path=path)

    def load_shard_path(
        self, shard_id: ShardId, custom_data_path: str | None = None
    ) -> ShardPath | None:
        """Find the shard's standard on-disk path.

        Args:
            shard_id: The shard to look up
            custom_data_path: The index's custom data path, if any

        Returns:
            The shard path, or ``None`` if the shard was never allocated on
            this node

        Raises:
            ShardPathResolutionError: If a data path cannot be inspected or
                the shard exists in more than one data path
        """
        found: Path | None = None
        for candidate in self.available_shard_paths(shard_id):
            if not _is_directory(shard_id, candidate):
                continue
            if found is not None:
                raise ShardPathResolutionError(
                    shard_id, f"more than one shard directory found: {found}, {candidate}"
                )
            found = candidate

        if found is None:
            return None

        if custom_data_path:
            data_path = self.resolve_custom_location(custom_data_path, shard_id)
            return ShardPath(
                shard_id=shard_id,
                data_path=data_path,
                shard_state_path=found,
                is_custom_data_path=True,
            )
        return ShardPath(shard_id=shard_id, data_path=found, shard_state_path=found)


def _is_directory(shard_id: ShardId, path: Path) -> bool:
    try:
        mode = os.stat(path).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise ShardPathResolutionError(shard_id, str(path), original_error=e) from e
    return stat.S_ISDIR(mode)
