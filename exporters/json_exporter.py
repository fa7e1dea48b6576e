"""JSON exporter for dependency graphs (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph.model import DependencyGraph
from .common import display_path, top_inbound, top_outbound


def to_json(
    graph: DependencyGraph,
    root: Path,
    base: Optional[Path] = None,
    top: int = 3,
    indent: int = 2,
) -> str:
    """
    Convert a dependency graph to JSON format.

    Edges are listed in insertion order and parallel edges are kept, so the
    edge list length always equals the graph's edge count.

    Args:
        graph: The dependency graph to export.
        root: Scan root for relative paths.
        base: Optional base path for relative path display.
        top: Number of entries in the inbound/outbound rankings.
        indent: JSON indentation level.

    Returns:
        JSON string representation of the graph and its statistics.
    """
    def rel(node):
        return display_path(node, root, base)

    nodes: List[Dict[str, Any]] = [
        {
            "path": rel(node),
            "inbound": graph.get_inbound_count(node),
            "outbound": graph.get_outbound_count(node),
        }
        for node in sorted(graph.nodes, key=lambda n: n.sort_key)
    ]

    edges: List[Dict[str, str]] = [
        {"source": rel(edge.source), "target": rel(edge.target)}
        for edge in graph.edges
    ]

    orphans = [rel(node) for node in graph.get_orphan_nodes()]
    cycles = [[rel(node) for node in cycle] for cycle in graph.get_cycles()]

    data: Dict[str, Any] = {
        "stats": {
            "nodes": len(graph),
            "edges": len(graph.edges),
            "orphans": len(orphans),
            "cycles": len(cycles),
        },
        "nodes": nodes,
        "edges": edges,
        "top_inbound": [
            {"path": rel(node), "count": count} for node, count in top_inbound(graph, top)
        ],
        "top_outbound": [
            {"path": rel(node), "count": count} for node, count in top_outbound(graph, top)
        ],
        "orphans": orphans,
        "cycles": cycles,
    }

    return json.dumps(data, indent=indent)
