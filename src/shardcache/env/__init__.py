"""Node environment: resolves shard and index directories on disk."""

from .node_environment import NodeEnvironment, NodePath

__all__ = ["NodeEnvironment", "NodePath"]
