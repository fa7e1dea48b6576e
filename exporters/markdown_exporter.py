"""Markdown report exporter for dependency graphs."""

from pathlib import Path
from typing import List, Optional, Tuple

from graph.model import DependencyGraph, DependencyNode
from .common import display_path, top_inbound, top_outbound


def to_markdown(
    graph: DependencyGraph,
    root: Path,
    base: Optional[Path] = None,
    top: int = 3,
    orphan_limit: int = 20,
    title: str = "File Dependency Report",
) -> str:
    """
    Render a dependency graph as a Markdown report.

    Args:
        graph: The dependency graph to export.
        root: Scan root for relative paths.
        base: Optional base path for relative path display.
        top: Number of entries in the inbound/outbound rankings.
        orphan_limit: Maximum number of orphans listed by name.
        title: Heading of the report.

    Returns:
        Markdown document.
    """
    orphans = graph.get_orphan_nodes()
    cycles = graph.get_cycles()

    lines: List[str] = [
        f"# {title}",
        "",
        f"Root: `{root.as_posix()}`",
        "",
        "## Statistics",
        "",
        "| Metric | Value |",
        "| --- | ---: |",
        f"| Nodes | {len(graph)} |",
        f"| Edges | {len(graph.edges)} |",
        f"| Orphans | {len(orphans)} |",
        f"| Cycles | {len(cycles)} |",
    ]

    lines.extend(_ranking_section("Most referenced", "Inbound", top_inbound(graph, top), root, base))
    lines.extend(_ranking_section("Most dependencies", "Outbound", top_outbound(graph, top), root, base))

    lines.append("")
    lines.append("## Orphans")
    lines.append("")
    if not orphans:
        lines.append("_None._")
    for node in orphans[:orphan_limit]:
        lines.append(f"- `{display_path(node, root, base)}`")
    if len(orphans) > orphan_limit:
        lines.append(f"- ... (+{len(orphans) - orphan_limit} more)")

    lines.append("")
    lines.append("## Cycles")
    lines.append("")
    if not cycles:
        lines.append("_None._")
    for i, cycle in enumerate(cycles, start=1):
        members = ", ".join(f"`{display_path(node, root, base)}`" for node in cycle)
        lines.append(f"{i}. ({len(cycle)}) {members}")

    lines.append("")
    return "\n".join(lines)


def _ranking_section(
    heading: str,
    column: str,
    ranking: List[Tuple[DependencyNode, int]],
    root: Path,
    base: Optional[Path],
) -> List[str]:
    """Render one ranking as a Markdown table."""
    lines = ["", f"## {heading}", ""]
    if not ranking:
        lines.append("_None._")
        return lines

    lines.append(f"| File | {column} |")
    lines.append("| --- | ---: |")
    for node, count in ranking:
        lines.append(f"| `{display_path(node, root, base)}` | {count} |")
    return lines
