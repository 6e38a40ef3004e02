"""Tests for component wiring."""

import logging
from pathlib import Path

import pytest

from shardcache.cleanup import CompositeIndexStoreListener, FileCacheCleaner
from shardcache.config import FileCacheLayout, LoggingConfig, NodeConfig, ShardCacheConfig
from shardcache.factory import (
    build_file_cache_cleaner,
    build_node_environment,
    configure_logging,
    register_file_cache_cleaner,
)
from shardcache.filecache import InMemoryFileCache

pytestmark = pytest.mark.unit


def test_build_node_environment(tmp_path: Path) -> None:
    config = ShardCacheConfig(
        node=NodeConfig(
            data_paths=(str(tmp_path / "a"), str(tmp_path / "b")),
            file_cache_path_index=1,
            shared_data_path=str(tmp_path / "shared"),
            node_id=3,
            layout=FileCacheLayout(file_cache_dirname="fc"),
        )
    )

    env = build_node_environment(config)

    assert env.file_cache_node_path().file_cache_path == tmp_path / "b" / "fc"
    assert env.shared_data_path == tmp_path / "shared"
    assert env.node_id == 3


def test_cache_is_resolved_lazily() -> None:
    holder: dict[str, InMemoryFileCache] = {}
    cleaner = build_file_cache_cleaner(lambda: holder.get("cache"))

    assert cleaner.file_cache_provider() is None
    holder["cache"] = InMemoryFileCache()
    assert cleaner.file_cache_provider() is holder["cache"]


def test_register_file_cache_cleaner() -> None:
    dispatcher = CompositeIndexStoreListener()

    cleaner = register_file_cache_cleaner(dispatcher, InMemoryFileCache)

    assert isinstance(cleaner, FileCacheCleaner)
    assert dispatcher.listeners == (cleaner,)


def test_configure_logging(tmp_path: Path) -> None:
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    log_file = tmp_path / "out.log"
    config = ShardCacheConfig(
        node=NodeConfig(data_paths=(str(tmp_path),)),
        logging_config=LoggingConfig(level=logging.WARNING, log_file=str(log_file)),
    )
    try:
        configure_logging(config)

        assert root_logger.level == logging.WARNING
        assert any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
    finally:
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers = saved_handlers
        root_logger.setLevel(saved_level)
