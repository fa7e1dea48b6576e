"""Scanner module for file discovery and graph construction."""

from .discovery import iter_files
from .options import (
    ConfigError,
    ScanOptions,
    DEFAULT_EXCLUDE_DIRS,
    find_config,
    load_config,
    options_from_config,
)
from .builder import build_graph, read_file

__all__ = [
    "iter_files",
    "ConfigError",
    "ScanOptions",
    "DEFAULT_EXCLUDE_DIRS",
    "find_config",
    "load_config",
    "options_from_config",
    "build_graph",
    "read_file",
]
