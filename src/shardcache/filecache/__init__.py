"""File cache interface consumed by the cleanup coordinator."""

from .fakes import InMemoryFileCache
from .protocols import FileCacheProtocol, FileCacheProvider

__all__ = ["FileCacheProtocol", "FileCacheProvider", "InMemoryFileCache"]
