"""Integration tests: shard and index deletion driven through the dispatcher.

A minimal stand-in for the storage layer notifies the registered listeners
and then removes the shard directory itself, the way a node deletes shards.
"""

import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from shardcache.cleanup import CompositeIndexStoreListener
from shardcache.env import NodeEnvironment
from shardcache.factory import register_file_cache_cleaner
from shardcache.filecache import InMemoryFileCache
from shardcache.models import Index, IndexStorageConfig, ShardId, StorageMode

pytestmark = pytest.mark.integration

SHARDS = 8


def delete_shard(
    dispatcher: CompositeIndexStoreListener,
    shard_id: ShardId,
    settings: IndexStorageConfig,
    node_env: NodeEnvironment,
) -> None:
    dispatcher.before_shard_path_deleted(shard_id, settings, node_env)
    for path in node_env.available_shard_paths(shard_id):
        shutil.rmtree(path, ignore_errors=True)


def delete_index(
    dispatcher: CompositeIndexStoreListener,
    index: Index,
    settings: IndexStorageConfig,
    node_env: NodeEnvironment,
) -> None:
    dispatcher.before_index_path_deleted(index, settings, node_env)
    for node_path in node_env.node_paths():
        shutil.rmtree(node_path.resolve_index(index), ignore_errors=True)


@pytest.fixture
def dispatcher(file_cache: InMemoryFileCache) -> CompositeIndexStoreListener:
    dispatcher = CompositeIndexStoreListener()
    register_file_cache_cleaner(dispatcher, lambda: file_cache)
    return dispatcher


def test_remote_snapshot_index_deleted_concurrently(
    dispatcher, file_cache, node_env, node_root, index: Index, populate
) -> None:
    settings = IndexStorageConfig(index, StorageMode.REMOTE_SNAPSHOT)
    for num in range(SHARDS):
        populate(
            node_root / "cache" / index.uuid / str(num) / "RemoteLocalStore",
            [f"block_{i}.part" for i in range(10)],
        )
    unrelated = populate(node_root / "cache" / "other-uuid" / "0" / "RemoteLocalStore", ["keep"])

    with capture_logs() as logs, ThreadPoolExecutor(max_workers=4) as pool:
        futures = [
            pool.submit(delete_shard, dispatcher, ShardId(index, num), settings, node_env)
            for num in range(SHARDS)
        ]
        for future in futures:
            future.result()
        delete_index(dispatcher, index, settings, node_env)

    assert file_cache.keys() == set(unrelated)
    assert len(file_cache.removed) == SHARDS * 10
    assert not (node_root / "cache" / index.uuid).exists()
    assert [entry for entry in logs if entry["log_level"] == "error"] == []


def test_warm_index_lifecycle(
    dispatcher, file_cache, node_env, node_root, index: Index, populate
) -> None:
    settings = IndexStorageConfig(index, StorageMode.WARM)
    for num in range(SHARDS):
        populate(node_root / "indices" / index.uuid / str(num) / "index", ["_0.cfs", "_0.si"])

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(
            pool.map(
                lambda num: delete_shard(dispatcher, ShardId(index, num), settings, node_env),
                range(SHARDS),
            )
        )
    delete_index(dispatcher, index, settings, node_env)

    assert len(file_cache) == 0
    assert not (node_root / "indices" / index.uuid).exists()


def test_repeated_deletion_is_idempotent(
    dispatcher, file_cache, node_env, node_root, index: Index, populate
) -> None:
    settings = IndexStorageConfig(index, StorageMode.REMOTE_SNAPSHOT)
    populate(node_root / "cache" / index.uuid / "0" / "RemoteLocalStore", ["a", "b"])
    shard_id = ShardId(index, 0)

    delete_shard(dispatcher, shard_id, settings, node_env)
    delete_index(dispatcher, index, settings, node_env)
    removed_after_first = list(file_cache.removed)

    with capture_logs() as logs:
        delete_shard(dispatcher, shard_id, settings, node_env)
        delete_index(dispatcher, index, settings, node_env)

    assert file_cache.removed == removed_after_first
    assert [entry for entry in logs if entry["log_level"] == "error"] == []


def test_plain_index_is_left_alone(
    dispatcher, file_cache, node_env, node_root, index: Index, populate
) -> None:
    settings = IndexStorageConfig(index, StorageMode.NONE)
    keys = populate(node_root / "cache" / index.uuid / "0" / "RemoteLocalStore", ["a"])

    dispatcher.before_shard_path_deleted(ShardId(index, 0), settings, node_env)
    dispatcher.before_index_path_deleted(index, settings, node_env)

    assert file_cache.keys() == set(keys)
    assert (node_root / "cache" / index.uuid).exists()
