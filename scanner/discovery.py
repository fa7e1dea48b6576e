"""File discovery utilities for scanning directory trees."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .options import ScanOptions


logger = logging.getLogger(__name__)


def iter_files(root: Path, options: Optional[ScanOptions] = None) -> Iterator[Path]:
    """
    Iterate over files in a directory tree.

    Directories that cannot be listed and entries that cannot be
    inspected are logged and skipped; the walk continues with their
    siblings.

    Args:
        root: Root directory to scan.
        options: Traversal options. If None, uses ScanOptions defaults.

    Yields:
        Absolute paths of matching files, in sorted order per directory.
    """
    if options is None:
        options = ScanOptions()

    root = root.resolve()

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if options.max_depth is not None and depth > options.max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            logger.warning("Skipping directory %s: %s", current, e)
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.warning("Skipping inaccessible entry %s: %s", entry, e)
                continue

            if is_dir:
                if options.is_excluded_dir(entry.name):
                    logger.debug("Excluding directory %s", entry)
                    continue
                if entry.is_symlink() and not options.follow_symlinks:
                    logger.debug("Not following symlinked directory %s", entry)
                    continue
                yield from _walk(entry, depth + 1)
            elif is_file:
                if options.accepts_file(entry):
                    yield entry

    yield from _walk(root, 0)

