"""Graph builder that orchestrates scanning and graph construction."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from graph.model import DependencyGraph
from rules.base import DependencyRule
from .discovery import iter_files
from .options import ScanOptions


logger = logging.getLogger(__name__)


def read_file(file_path: Path) -> Optional[str]:
    """
    Read a file's text content.

    Undecodable bytes are replaced rather than rejected, so any file that
    can be opened yields content.

    Returns:
        The content, or None if the file cannot be read.
    """
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Skipping unreadable file %s: %s", file_path, e)
        return None


def build_graph(
    root: Path,
    rules: Iterable[DependencyRule],
    options: Optional[ScanOptions] = None,
) -> DependencyGraph:
    """
    Scan a directory tree and build a dependency graph.

    Every readable file becomes a node, even without references. Each file
    is then passed to every rule that handles it.

    Args:
        root: Root directory to scan.
        rules: Rules to apply, supplied by the caller.
        options: Traversal options (default: ScanOptions()).

    Returns:
        DependencyGraph containing all discovered dependencies.
    """
    graph = DependencyGraph()
    rules = list(rules)
    root = root.resolve()

    files_read = 0
    for file_path in iter_files(root, options):
        content = read_file(file_path)
        if content is None:
            continue

        path = str(file_path)
        graph.get_or_add_node(path)
        files_read += 1

        for rule in rules:
            if not rule.can_handle(path):
                continue
            added = rule.analyze(path, content, graph)
            if added:
                logger.debug("%s: %d dependencies from %s rule", path, added, rule.name)

    logger.info(
        "Scanned %d files under %s: %d nodes, %d edges",
        files_read, root, len(graph), len(graph.edges),
    )
    return graph
