"""Exporters for converting a dependency graph to various output formats."""

from .summary_exporter import to_summary
from .json_exporter import to_json
from .markdown_exporter import to_markdown
from .mermaid_exporter import to_mermaid

__all__ = ["to_summary", "to_json", "to_markdown", "to_mermaid"]
