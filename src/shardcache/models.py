"""Data classes describing indices, shards and their cache locations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class StorageMode(str, Enum):
    """How an index's data is backed.

    An index is in exactly one mode; only that mode's cache layout is touched
    when the index or one of its shards is deleted.
    """

    REMOTE_SNAPSHOT = "remote_snapshot"
    WARM = "warm"
    NONE = "none"


@dataclass(frozen=True)
class Index:
    """Identity of an index: its human name plus the UUID used on disk."""

    name: str
    uuid: str

    def __str__(self) -> str:
        return f"[{self.name}/{self.uuid}]"


@dataclass(frozen=True)
class ShardId:
    """Identity of a single shard of an index."""

    index: Index
    shard_num: int

    def __str__(self) -> str:
        return f"{self.index}[{self.shard_num}]"


@dataclass(frozen=True)
class IndexStorageConfig:
    """Storage settings of an index as seen by lifecycle listeners.

    Attributes:
        index: The index these settings belong to
        storage_mode: Remote-snapshot, warm or neither
        custom_data_path: Optional custom data path the index's shards live
            under instead of the node's default indices directory
    """

    index: Index
    storage_mode: StorageMode = StorageMode.NONE
    custom_data_path: str | None = None

    @property
    def is_remote_snapshot(self) -> bool:
        return self.storage_mode is StorageMode.REMOTE_SNAPSHOT

    @property
    def is_warm_index(self) -> bool:
        return self.storage_mode is StorageMode.WARM


@dataclass(frozen=True)
class ShardPath:
    """Resolved on-disk location of a shard.

    ``data_path`` is where the shard's files live; ``shard_state_path`` is the
    directory holding its state metadata, usually the same directory.
    """

    shard_id: ShardId
    data_path: Path
    shard_state_path: Path
    is_custom_data_path: bool = False


@dataclass(frozen=True)
class ShardCacheLocation:
    """Shard-level cache root computed for a single deletion event."""

    shard_id: ShardId
    storage_mode: StorageMode
    root: Path


@dataclass(frozen=True)
class IndexCacheLocation:
    """Index-level cache root computed for a single deletion event."""

    index: Index
    storage_mode: StorageMode
    root: Path
