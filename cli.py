#!/usr/bin/env python3
"""
dllmap CLI

A tool for resolving the transitive DLL dependencies of PE modules against
a list of search directories.
"""

import argparse
import logging
import sys
from pathlib import Path

from graph.model import DependencyMap, RecordState
from scanner.builder import build_graph
from scanner.config import FORMATS, ScanConfig, load_config, merge_search_dirs
from scanner.errors import ConfigError, IncompleteTraversalError
from exporters import to_text, to_json


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INPUT_NOT_FOUND = 3
EXIT_UNRESOLVED = 4
EXIT_INVALID = 5

LOG_FORMAT = "%(levelname)s | %(message)s"

logger = logging.getLogger("dllmap")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dllmap",
        description="Resolve the transitive DLL dependencies of PE modules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dllmap app.exe -L ./bin                     # Resolve against ./bin
  dllmap app.exe -L ./bin -L /mingw64/bin -l  # Two directories, list imports
  dllmap app.exe -L ./bin --found-only        # Hide unresolved names
  dllmap a.exe b.dll -c dllmap.toml -f json   # Config file, JSON output

Exit codes:
  0 all resolved, 1 error, 3 input not found, 4 unresolved, 5 invalid module
        """,
    )

    # Positional arguments
    parser.add_argument(
        "modules",
        nargs="+",
        help="Module (executable or DLL) paths to analyze",
    )

    # Resolution options
    parser.add_argument(
        "-L", "--search-dir",
        dest="search_dirs",
        action="append",
        default=None,
        metavar="DIR",
        help="Directory to search for dependencies (repeatable, earlier wins)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Configuration file (.toml, .yaml, .yml or .json)",
    )

    # Output options
    parser.add_argument(
        "-l", "--long",
        action="store_true",
        help="Print the declared dependencies beneath each module",
    )

    parser.add_argument(
        "--found-only",
        action="store_true",
        help="Hide dependency names that could not be resolved",
    )

    parser.add_argument(
        "-f", "--format",
        choices=list(FORMATS),
        default=None,
        help="Output format (default: text)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    # Logging options
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log traversal details",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )

    return parser.parse_args(args)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr at the requested level."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def exit_code_for(dep_map: DependencyMap) -> int:
    """Pick the exit code for a finished run; the most severe outcome wins."""
    counts = dep_map.counts()
    if counts[RecordState.INVALID]:
        return EXIT_INVALID
    if counts[RecordState.NOT_FOUND]:
        return EXIT_UNRESOLVED
    if dep_map.missing_inputs:
        return EXIT_INPUT_NOT_FOUND
    return EXIT_OK


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose, parsed.quiet)

    config = ScanConfig()
    if parsed.config:
        try:
            config = load_config(parsed.config)
        except ConfigError as e:
            logger.error("%s", e)
            return EXIT_ERROR

    search_dirs = merge_search_dirs(parsed.search_dirs, config)
    for directory in search_dirs:
        if not directory.is_dir():
            logger.warning("search directory does not exist: %s", directory)

    show_long = parsed.long or config.show_long
    found_only = parsed.found_only or config.found_only
    output_format = parsed.format or config.format or "text"
    base = Path(parsed.relative_to).resolve() if parsed.relative_to else None

    # Build the dependency map
    dep_map = build_graph(parsed.modules, search_dirs)
    logger.debug("%r", dep_map)

    # Generate output
    try:
        if output_format == "json":
            output = to_json(dep_map, found_only=found_only, base=base)
        else:
            output = to_text(dep_map, show_long=show_long, found_only=found_only, base=base)
    except IncompleteTraversalError as e:
        logger.error("incomplete traversal: %s", e)
        return EXIT_ERROR

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            logger.error("cannot write output: %s", e)
            return EXIT_ERROR
    elif output:
        print(output)

    return exit_code_for(dep_map)


if __name__ == "__main__":
    sys.exit(main())
