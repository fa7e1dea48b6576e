"""Mermaid flowchart exporter for dependency graphs."""

import re
from pathlib import Path
from typing import Dict, List, Optional, Set

from graph.model import DependencyGraph, DependencyNode
from .common import display_path


CYCLE_STYLE = "stroke:#ff0000,stroke-width:2px"


def to_mermaid(
    graph: DependencyGraph,
    root: Path,
    orientation: str = "LR",
    base: Optional[Path] = None,
    group_by_directory: bool = False,
    show_all: bool = False,
) -> str:
    """
    Convert a dependency graph to Mermaid flowchart syntax.

    Parallel edges are drawn once. Members of a cycle are highlighted.

    Args:
        graph: The dependency graph to export.
        root: Scan root for relative paths.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        base: Optional base path for relative path display.
        group_by_directory: If True, group nodes by top-level directory.
        show_all: If True, include orphan nodes. Default False.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]

    nodes = sorted(graph.nodes, key=lambda n: n.sort_key)
    if not show_all:
        orphans = set(graph.get_orphan_nodes())
        nodes = [node for node in nodes if node not in orphans]

    node_ids = _assign_ids(nodes, root, base)

    if group_by_directory:
        lines.extend(_grouped_node_lines(nodes, node_ids, root, base))
    else:
        for node in nodes:
            lines.append(f'    {node_ids[node]}["{display_path(node, root, base)}"]')

    # Edges, one per distinct (source, target) pair
    edge_lines: List[str] = []
    seen: Set[tuple] = set()
    for source, target in graph.edges:
        pair = (source, target)
        if pair in seen:
            continue
        seen.add(pair)
        edge_lines.append(f"    {node_ids[source]} --> {node_ids[target]}")
    if edge_lines:
        lines.append("")
        lines.extend(edge_lines)

    cycles = graph.get_cycles()
    if cycles:
        lines.append("")
        lines.append("    %% Cycles")
        for cycle in cycles:
            for node in cycle:
                lines.append(f"    style {node_ids[node]} {CYCLE_STYLE}")

    return "\n".join(lines)


def _grouped_node_lines(
    nodes: List[DependencyNode],
    node_ids: Dict[DependencyNode, str],
    root: Path,
    base: Optional[Path],
) -> List[str]:
    """Generate node definitions inside one subgraph per top-level directory."""
    groups: Dict[str, List[DependencyNode]] = {}
    for node in nodes:
        parts = display_path(node, root, base).split("/")
        top_dir = parts[0] if len(parts) > 1 else "root"
        groups.setdefault(top_dir, []).append(node)

    lines = []
    for group_name in sorted(groups, key=str.lower):
        lines.append(f"    subgraph {sanitize_id('dir_' + group_name)}[{group_name}]")
        for node in groups[group_name]:
            lines.append(f'        {node_ids[node]}["{display_path(node, root, base)}"]')
        lines.append("    end")
    return lines


def _assign_ids(
    nodes: List[DependencyNode],
    root: Path,
    base: Optional[Path],
) -> Dict[DependencyNode, str]:
    """Give every node a unique Mermaid identifier."""
    ids: Dict[DependencyNode, str] = {}
    used: Set[str] = set()
    for node in nodes:
        candidate = sanitize_id(display_path(node, root, base))
        unique = candidate
        suffix = 2
        while unique in used:
            unique = f"{candidate}_{suffix}"
            suffix += 1
        used.add(unique)
        ids[node] = unique
    return ids


def sanitize_id(value: str) -> str:
    """
    Sanitize a string to be a valid Mermaid ID.

    Mermaid IDs can only contain letters, digits, and underscores.
    """
    sanitized = re.sub(r"[/\\.\-]", "_", value)
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return sanitized or "unknown"
