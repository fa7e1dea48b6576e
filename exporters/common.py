"""Helpers shared by the exporters."""

from pathlib import Path
from typing import List, Optional, Tuple

from graph.model import DependencyGraph, DependencyNode


def display_path(node: DependencyNode, root: Path, base: Optional[Path] = None) -> str:
    """
    Get the display string for a node.

    Tries the path relative to ``base`` first, then relative to ``root``,
    and falls back to the full path. Separators are always ``/``.
    """
    path = Path(node.file_path)
    for anchor in (base, root):
        if anchor is None:
            continue
        try:
            return path.relative_to(anchor).as_posix()
        except ValueError:
            continue
    return str(path).replace("\\", "/")


def top_inbound(graph: DependencyGraph, top: int) -> List[Tuple[DependencyNode, int]]:
    """Top ``top`` nodes by inbound count, without zero counts."""
    return [(node, count) for node, count in graph.get_top_inbound(top) if count > 0]


def top_outbound(graph: DependencyGraph, top: int) -> List[Tuple[DependencyNode, int]]:
    """Top ``top`` nodes by outbound count, without zero counts."""
    return [(node, count) for node, count in graph.get_top_outbound(top) if count > 0]
