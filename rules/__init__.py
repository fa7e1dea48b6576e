"""Rules that recognize file references per file type."""

from typing import List

from .base import DependencyRule
from .markdown import MarkdownDependencyRule
from .powershell import PowerShellDependencyRule


def default_rules() -> List[DependencyRule]:
    """Return a fresh list of the built-in rules."""
    return [MarkdownDependencyRule(), PowerShellDependencyRule()]


__all__ = [
    "DependencyRule",
    "MarkdownDependencyRule",
    "PowerShellDependencyRule",
    "default_rules",
]
