"""Exceptions for the shard file-cache cleanup coordinator.

This module defines the exception hierarchy used to describe cleanup failures.
Leaf routines never raise these past the lifecycle listener: they are carried
as values inside cleanup results and reported by the listener's logging
boundary.
"""

from pathlib import Path
from typing import Any


class ShardCacheError(Exception):
    """Base exception class for all shard cache errors.

    All shard cache exceptions inherit from this class so callers can tell
    project errors apart from arbitrary library failures.
    """

    def __init__(self, message: str, *, error_code: str | None = None, context: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Optional machine-readable error code
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}


# Configuration Errors
class ConfigurationError(ShardCacheError):
    """Base class for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Exception raised when configuration values are invalid."""

    def __init__(self, config_key: str, value: Any, expected: str):
        """Initialize the exception.

        Args:
            config_key: The configuration key that is invalid
            value: The invalid value that was provided
            expected: Description of what was expected
        """
        self.config_key = config_key
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid configuration for '{config_key}': got {value}, expected {expected}",
            error_code="INVALID_CONFIG",
            context={"config_key": config_key, "value": value, "expected": expected}
        )


class MissingConfigurationError(ConfigurationError):
    """Exception raised when required configuration is missing."""

    def __init__(self, config_key: str):
        """Initialize the exception.

        Args:
            config_key: The missing configuration key
        """
        self.config_key = config_key
        super().__init__(
            f"Missing required configuration: '{config_key}'",
            error_code="MISSING_CONFIG",
            context={"config_key": config_key}
        )


# Cleanup Errors
class CleanupError(ShardCacheError):
    """Base class for failures while cleaning up cache state."""

    def __init__(
        self,
        path: str | Path | None,
        message: str,
        *,
        error_code: str,
        original_error: Exception | None = None,
    ):
        """Initialize the exception.

        Args:
            path: Path the failing operation was working on
            message: Description of what failed
            error_code: Machine-readable error code
            original_error: The original exception that caused this error
        """
        self.path = Path(path) if path is not None else None
        self.original_error = original_error

        error_msg = message
        if original_error:
            error_msg += f" (caused by: {type(original_error).__name__}: {original_error})"

        super().__init__(
            error_msg,
            error_code=error_code,
            context={
                "path": str(self.path) if self.path else None,
                "original_error": str(original_error) if original_error else None,
            },
        )


class ResolutionError(CleanupError):
    """Exception raised when a cache location cannot be determined."""

    def __init__(self, path: str | Path | None = None, message: str = "", *, original_error: Exception | None = None):
        super().__init__(
            path,
            message or "Failed to resolve cache location",
            error_code="RESOLUTION_FAILED",
            original_error=original_error,
        )


class ShardPathResolutionError(ResolutionError):
    """Exception raised when a shard's on-disk path cannot be determined."""

    def __init__(self, shard_id: Any, message: str = "", *, original_error: Exception | None = None):
        """Initialize the exception.

        Args:
            shard_id: Identity of the shard being resolved
            message: Additional error message details
            original_error: The original exception that caused this error
        """
        self.shard_id = shard_id
        error_msg = f"Failed to load shard path for {shard_id}"
        if message:
            error_msg += f": {message}"
        super().__init__(None, error_msg, original_error=original_error)
        self.context["shard_id"] = str(shard_id)


class CacheUnavailableError(ResolutionError):
    """Exception raised when the shared file cache has not been initialized."""

    def __init__(self, *, original_error: Exception | None = None) -> None:
        super().__init__(None, "File cache is not available", original_error=original_error)
        self.error_code = "CACHE_UNAVAILABLE"


class ListingError(CleanupError):
    """Exception raised when a cache directory cannot be enumerated."""

    def __init__(self, path: str | Path, message: str = "", *, original_error: Exception | None = None):
        """Initialize the exception.

        Args:
            path: The directory that could not be listed, or the entry that
                could not be canonicalized
            message: Additional error message details
            original_error: The original exception that caused this error
        """
        error_msg = f"Failed to list cache entries under {path}"
        if message:
            error_msg += f": {message}"
        super().__init__(path, error_msg, error_code="LISTING_FAILED", original_error=original_error)


class RemovalError(CleanupError):
    """Exception raised when a cache directory tree cannot be deleted."""

    def __init__(self, path: str | Path, *, original_error: Exception | None = None):
        """Initialize the exception.

        Args:
            path: The directory that could not be deleted
            original_error: The original exception that caused this error
        """
        super().__init__(
            path,
            f"Failed to delete cache path {path}",
            error_code="REMOVAL_FAILED",
            original_error=original_error,
        )


class CacheRemovalError(CleanupError):
    """Exception raised when the file cache fails to drop an entry."""

    def __init__(self, path: str | Path, *, original_error: Exception | None = None):
        """Initialize the exception.

        Args:
            path: Canonical key the cache was asked to remove
            original_error: The error raised by the cache
        """
        super().__init__(
            path,
            f"Failed to remove cache entry {path}",
            error_code="CACHE_REMOVAL_FAILED",
            original_error=original_error,
        )
