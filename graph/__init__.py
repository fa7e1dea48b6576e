"""Dependency graph model and analysis."""

from .model import DependencyNode, DependencyEdge, DependencyGraph
from .cycles import strongly_connected_components, find_cycles

__all__ = [
    "DependencyNode",
    "DependencyEdge",
    "DependencyGraph",
    "strongly_connected_components",
    "find_cycles",
]
