"""Scan options and configuration file loading."""

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Set

import yaml


logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_DIRS = {".git", ".vs", "bin", "obj"}

CONFIG_FILENAMES = (
    ".filedeps.yaml",
    ".filedeps.yml",
    ".filedeps.toml",
    ".filedeps.json",
)

# Keys accepted in a config file, with the type each value must have
CONFIG_KEYS = {
    "exclude_dirs": list,
    "include_ext": list,
    "max_depth": int,
    "top": int,
    "orphan_limit": int,
    "format": str,
}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is invalid."""


@dataclass
class ScanOptions:
    """
    Options that influence how the scanner traverses the directory tree.

    Attributes:
        exclude_dirs: Directory names to skip entirely, compared
            case-insensitively. Entries starting with ``*`` match name
            suffixes (e.g. ``*.egg-info``).
        include_ext: Lower-cased suffixes of files to read; None reads all.
        file_filter: Optional predicate; files for which it returns False
            are skipped.
        max_depth: Maximum directory depth to descend. None is unlimited.
        follow_symlinks: Whether to descend into symlinked directories.
    """

    exclude_dirs: Set[str] = field(default_factory=lambda: set(DEFAULT_EXCLUDE_DIRS))
    include_ext: Optional[Set[str]] = None
    file_filter: Optional[Callable[[Path], bool]] = None
    max_depth: Optional[int] = None
    follow_symlinks: bool = False

    def __post_init__(self):
        self.exclude_dirs = {name.lower() for name in self.exclude_dirs}
        if self.include_ext is not None:
            self.include_ext = normalize_extensions(self.include_ext)

    def is_excluded_dir(self, name: str) -> bool:
        """Check a directory name against the exclusion set."""
        lowered = name.lower()
        if lowered in self.exclude_dirs:
            return True
        return any(
            lowered.endswith(pattern[1:])
            for pattern in self.exclude_dirs
            if pattern.startswith("*")
        )

    def accepts_file(self, path: Path) -> bool:
        """Check a file against the extension set and the custom filter."""
        if self.include_ext is not None and path.suffix.lower() not in self.include_ext:
            return False
        if self.file_filter is not None and not self.file_filter(path):
            return False
        return True


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """Lower-case extensions and make sure each starts with a dot."""
    normalized = set()
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext)
    return normalized


def find_config(root: Path) -> Optional[Path]:
    """
    Look for a configuration file in the scan root.

    Returns:
        The first existing file from CONFIG_FILENAMES, or None.
    """
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Read and validate a configuration file.

    The format is chosen by suffix: YAML (``.yaml``/``.yml``), TOML or JSON.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Mapping containing only recognized keys.

    Raises:
        ConfigError: If the file cannot be read, parsed or has invalid values.
    """
    suffix = config_path.suffix.lower()

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config file '{config_path}': {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigError(f"unsupported config format '{suffix}' for '{config_path}'")
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse config file '{config_path}': {e}") from e

    # An empty YAML document loads as None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file '{config_path}' must contain a mapping")

    config: Dict[str, Any] = {}
    for key, value in data.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            logger.warning("Ignoring unknown config key '%s' in %s", key, config_path)
            continue
        # bool is an int subclass; reject it for numeric settings
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(
                f"config key '{key}' in '{config_path}' must be of type {expected.__name__}"
            )
        if expected is list and not all(isinstance(item, str) for item in value):
            raise ConfigError(
                f"config key '{key}' in '{config_path}' must be a list of strings"
            )
        if expected is int and value < 0:
            raise ConfigError(
                f"config key '{key}' in '{config_path}' must not be negative"
            )
        config[key] = value

    logger.debug("Loaded config from %s: %s", config_path, config)
    return config


def options_from_config(
    config: Dict[str, Any],
    extra_exclude_dirs: Optional[Iterable[str]] = None,
    include_ext: Optional[Iterable[str]] = None,
    max_depth: Optional[int] = None,
) -> ScanOptions:
    """
    Build ScanOptions from a config mapping and command line overrides.

    Exclusions from both sources extend the defaults. Explicit
    ``include_ext`` and ``max_depth`` arguments win over the config.
    """
    exclude_dirs = set(DEFAULT_EXCLUDE_DIRS)
    exclude_dirs.update(config.get("exclude_dirs", []))
    if extra_exclude_dirs:
        exclude_dirs.update(extra_exclude_dirs)

    if include_ext is None:
        include_ext = config.get("include_ext")

    if max_depth is None:
        max_depth = config.get("max_depth")

    return ScanOptions(
        exclude_dirs=exclude_dirs,
        include_ext=set(include_ext) if include_ext is not None else None,
        max_depth=max_depth,
    )
