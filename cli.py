#!/usr/bin/env python3
"""
File Dependency Analyzer CLI

Scans a directory tree for references between files (Markdown links,
PowerShell dot-sourcing and module imports) and reports the resulting
dependency graph: most referenced files, most dependent files, orphans and
cycles.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from exporters import to_json, to_markdown, to_mermaid, to_summary
from rules import default_rules
from scanner.builder import build_graph
from scanner.options import ConfigError, find_config, load_config, options_from_config


logger = logging.getLogger("filedeps")

FORMATS = ["summary", "json", "markdown", "mermaid"]
DEFAULT_TOP = 3
DEFAULT_ORPHAN_LIMIT = 20

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CYCLES = 2
EXIT_INTERRUPTED = 130


def non_negative_int(value: str) -> int:
    """argparse type for counts and limits that must be zero or more."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="filedeps",
        description="Scan a directory tree for file references and analyze the dependency graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  filedeps .                          # Scan current directory, text summary
  filedeps ./docs -f markdown         # Markdown report for docs/
  filedeps . -f json -o deps.json     # JSON output to file
  filedeps . -f mermaid --group-by-dir
  filedeps . --top 10 --exclude-dir node_modules
  filedeps . --fail-on-cycles         # Exit with status 2 if cycles exist
        """,
    )

    # Positional arguments
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory to scan (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: summary)",
    )

    parser.add_argument(
        "--top",
        type=non_negative_int,
        default=None,
        help=f"Number of entries in the inbound/outbound rankings (default: {DEFAULT_TOP})",
    )

    parser.add_argument(
        "--orphan-limit",
        type=non_negative_int,
        default=None,
        help=f"Maximum number of orphans listed by name (default: {DEFAULT_ORPHAN_LIMIT})",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    # Mermaid-specific options
    parser.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="LR",
        help="Mermaid flowchart orientation (default: LR)",
    )

    parser.add_argument(
        "--group-by-dir",
        action="store_true",
        help="Group nodes by top-level directory in Mermaid output",
    )

    parser.add_argument(
        "--show-all",
        action="store_true",
        help="Include orphan files in Mermaid output",
    )

    # Scanning options
    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Additional directory names to exclude",
    )

    parser.add_argument(
        "--include-ext",
        nargs="+",
        default=None,
        help="Only read files with these extensions (e.g., .md .ps1)",
    )

    parser.add_argument(
        "--max-depth",
        type=non_negative_int,
        default=None,
        help="Maximum directory depth to scan",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Configuration file (default: .filedeps.{yaml,yml,toml,json} in the scan root)",
    )

    parser.add_argument(
        "--fail-on-cycles",
        action="store_true",
        help="Exit with status 2 when the graph contains cycles",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v: info, -vv: debug)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v flags."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_settings(parsed, root: Path) -> Dict[str, Any]:
    """Read the config file named on the command line or found in root."""
    if parsed.config:
        return load_config(Path(parsed.config))

    discovered = find_config(root)
    if discovered is None:
        return {}
    logger.info("Using config file %s", discovered)
    return load_config(discovered)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    # Resolve paths
    root = Path(parsed.root).resolve()
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return EXIT_ERROR

    base = Path(parsed.relative_to).resolve() if parsed.relative_to else root

    try:
        settings = _load_settings(parsed, root)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    output_format = parsed.format or settings.get("format", "summary")
    if output_format not in FORMATS:
        print(f"Error: unknown output format '{output_format}'", file=sys.stderr)
        return EXIT_ERROR

    top = parsed.top if parsed.top is not None else settings.get("top", DEFAULT_TOP)
    orphan_limit = (
        parsed.orphan_limit
        if parsed.orphan_limit is not None
        else settings.get("orphan_limit", DEFAULT_ORPHAN_LIMIT)
    )

    options = options_from_config(
        settings,
        extra_exclude_dirs=parsed.exclude_dir,
        include_ext=parsed.include_ext,
        max_depth=parsed.max_depth,
    )

    # Build the graph
    logger.info("Scanning %s", root)
    try:
        graph = build_graph(root, default_rules(), options)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_INTERRUPTED

    # Generate output
    if output_format == "json":
        output = to_json(graph, root, base=base, top=top)
    elif output_format == "markdown":
        output = to_markdown(graph, root, base=base, top=top, orphan_limit=orphan_limit)
    elif output_format == "mermaid":
        output = to_mermaid(
            graph,
            root,
            orientation=parsed.orientation,
            base=base,
            group_by_directory=parsed.group_by_dir,
            show_all=parsed.show_all,
        )
    else:  # summary (default)
        output = to_summary(graph, root, base=base, top=top, orphan_limit=orphan_limit)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_ERROR
    else:
        print(output)

    if parsed.fail_on_cycles and graph.get_cycles():
        return EXIT_CYCLES

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
