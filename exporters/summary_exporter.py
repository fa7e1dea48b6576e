"""Plain-text summary exporter for dependency graphs."""

from pathlib import Path
from typing import List, Optional

from graph.model import DependencyGraph
from .common import display_path, top_inbound, top_outbound


def to_summary(
    graph: DependencyGraph,
    root: Path,
    base: Optional[Path] = None,
    top: int = 3,
    orphan_limit: int = 20,
) -> str:
    """
    Render a human-readable report of a dependency graph.

    Args:
        graph: The dependency graph to export.
        root: Scan root for relative paths.
        base: Optional base path for relative path display.
        top: Number of entries in the inbound/outbound rankings.
        orphan_limit: Maximum number of orphans listed by name.

    Returns:
        Multi-line report.
    """
    lines: List[str] = [f"Nodes: {len(graph)} | Edges: {len(graph.edges)}"]

    sections = (
        (f"Top {top} Inbound (most referenced):", top_inbound(graph, top)),
        (f"Top {top} Outbound (most dependencies):", top_outbound(graph, top)),
    )
    for title, ranking in sections:
        lines.append("")
        lines.append(title)
        if not ranking:
            lines.append("  (none)")
        for node, count in ranking:
            lines.append(f"  {count:>3}  {display_path(node, root, base)}")

    orphans = sorted(
        (display_path(node, root, base) for node in graph.get_orphan_nodes()),
        key=str.lower,
    )
    lines.append("")
    lines.append(f"Orphans (no inbound & no outbound): {len(orphans)}")
    for path in orphans[:orphan_limit]:
        lines.append(f"  - {path}")
    if len(orphans) > orphan_limit:
        lines.append(f"  ... (+{len(orphans) - orphan_limit} more)")

    cycles = graph.get_cycles()
    lines.append("")
    lines.append(f"Cycles: {len(cycles)}")
    for i, cycle in enumerate(cycles, start=1):
        lines.append("")
        lines.append(f"Cycle {i} (size={len(cycle)}):")
        for node in cycle:
            lines.append(f"  - {display_path(node, root, base)}")

    return "\n".join(lines)
