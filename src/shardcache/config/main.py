"""Main configuration class for the shard cache cleanup coordinator.

``ShardCacheConfig`` aggregates the node layout and logging configuration and
knows how to read itself from ``SHARDCACHE_*`` environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..utils.exceptions import InvalidConfigurationError, MissingConfigurationError
from .components import LoggingConfig, NodeConfig

ENV_PREFIX = "SHARDCACHE_"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


def _env(name: str) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigurationError(key, raw, "an integer") from None


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidConfigurationError(key, raw, "a boolean")


def _parse_level(key: str, raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise InvalidConfigurationError(key, raw, "a logging level name")
    return level


@dataclass(frozen=True)
class ShardCacheConfig:
    """Configuration for the cleanup coordinator.

    Attributes:
        node: Node data paths and file cache layout
        logging_config: Log output settings
    """

    node: NodeConfig
    logging_config: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate cross-field constraints."""
        if not self.node.data_paths:
            raise MissingConfigurationError(f"{ENV_PREFIX}DATA_PATHS")
        index = self.node.file_cache_path_index
        if not 0 <= index < len(self.node.data_paths):
            raise InvalidConfigurationError(
                f"{ENV_PREFIX}FILE_CACHE_PATH_INDEX",
                index,
                f"an index between 0 and {len(self.node.data_paths) - 1}",
            )

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "ShardCacheConfig":
        """Build the configuration from environment variables.

        Args:
            env_file: Optional ``.env`` file loaded first; variables already
                present in the environment take precedence

        Returns:
            The parsed configuration

        Raises:
            MissingConfigurationError: If no data paths are configured
            InvalidConfigurationError: If a value cannot be parsed
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)

        raw_paths = _env("DATA_PATHS")
        if not raw_paths:
            raise MissingConfigurationError(f"{ENV_PREFIX}DATA_PATHS")
        data_paths = tuple(p for p in raw_paths.split(os.pathsep) if p)

        raw_index = _env("FILE_CACHE_PATH_INDEX")
        raw_node_id = _env("NODE_ID")
        node = NodeConfig(
            data_paths=data_paths,
            file_cache_path_index=(
                _parse_int(f"{ENV_PREFIX}FILE_CACHE_PATH_INDEX", raw_index)
                if raw_index
                else 0
            ),
            shared_data_path=_env("SHARED_DATA_PATH") or None,
            node_id=_parse_int(f"{ENV_PREFIX}NODE_ID", raw_node_id) if raw_node_id else 0,
        )

        raw_level = _env("LOG_LEVEL")
        raw_json = _env("JSON_LOGS")
        log_config = LoggingConfig(
            level=_parse_level(f"{ENV_PREFIX}LOG_LEVEL", raw_level) if raw_level else logging.INFO,
            json_logs=_parse_bool(f"{ENV_PREFIX}JSON_LOGS", raw_json) if raw_json else False,
            log_file=_env("LOG_FILE") or None,
        )
        return cls(node=node, logging_config=log_config)
