"""Pytest configuration for the shard cache tests.

This module provides common fixtures and configuration for the shard cache
tests.
"""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from pytest_socket import disable_socket, enable_socket

from shardcache.config import FileCacheLayout
from shardcache.env import NodeEnvironment
from shardcache.filecache import InMemoryFileCache
from shardcache.models import Index, IndexStorageConfig, ShardId, StorageMode


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Run unit tests before integration tests and mark them by location."""
    unit_tests = []
    integration_tests = []
    other_tests = []

    for item in items:
        test_path = str(item.path)
        if "/unit/" in test_path:
            unit_tests.append(item)
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            integration_tests.append(item)
            item.add_marker(pytest.mark.integration)
        else:
            other_tests.append(item)

    items[:] = unit_tests + integration_tests + other_tests


def pytest_runtest_setup(item: pytest.Item) -> None:
    """Set marker-based timeouts for tests.

    - unit: 1s per test
    - integration: 5s per test

    In CI environments, timeouts are multiplied by CI_TIMEOUT_MULTIPLIER.
    Individual @pytest.mark.timeout() decorators override these defaults.
    """
    if item.get_closest_marker("timeout"):
        return

    is_ci = any(os.environ.get(var) for var in ["CI", "GITHUB_ACTIONS", "JENKINS_URL"])
    ci_multiplier = (
        float(os.environ.get("CI_TIMEOUT_MULTIPLIER", "5.0")) if is_ci else 1.0
    )

    test_path = str(item.path)
    if "/unit/" in test_path:
        item.add_marker(pytest.mark.timeout(1 * ci_multiplier))
    elif "/integration/" in test_path:
        item.add_marker(pytest.mark.timeout(5 * ci_multiplier))


@pytest.fixture(autouse=True)
def disable_network(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Disable network access for unit tests."""
    if "integration" not in request.keywords:
        disable_socket(allow_unix_socket=True)
        yield
        enable_socket()
    else:
        yield


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog's default configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def layout() -> FileCacheLayout:
    return FileCacheLayout()


@pytest.fixture
def node_root(tmp_path: Path) -> Path:
    root = tmp_path / "node0"
    root.mkdir()
    return root


@pytest.fixture
def node_env(node_root: Path, layout: FileCacheLayout) -> NodeEnvironment:
    return NodeEnvironment([node_root], layout=layout)


@pytest.fixture
def file_cache() -> InMemoryFileCache:
    return InMemoryFileCache()


@pytest.fixture
def index() -> Index:
    return Index("logs-2024", "Xk3pQ9aLTbWm1")


@pytest.fixture
def index_settings(index: Index) -> Callable[..., IndexStorageConfig]:
    """Build storage settings for the test index in a given mode."""

    def _make(mode: StorageMode, custom_data_path: str | None = None) -> IndexStorageConfig:
        return IndexStorageConfig(index, mode, custom_data_path)

    return _make


@pytest.fixture
def populate(file_cache: InMemoryFileCache) -> Callable[..., list[Path]]:
    """Create files in a directory, caching them unless told otherwise.

    Returns canonical paths of the created files.
    """

    def _populate(directory: Path, names: list[str], cached: bool = True) -> list[Path]:
        directory.mkdir(parents=True, exist_ok=True)
        keys = []
        for name in names:
            file_path = directory / name
            file_path.write_bytes(b"\x00" * 16)
            keys.append(file_cache.put(file_path) if cached else file_path.resolve())
        return keys

    return _populate


@pytest.fixture
def shard_factory(index: Index) -> Callable[[int], ShardId]:
    return lambda num: ShardId(index, num)
