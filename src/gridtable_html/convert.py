"""Convert an mdast document containing grid tables into a hast tree.

``to_hast`` registers the grid-table handler on a BasicState and converts the
whole document.  Run as a module to convert a JSON file:

Usage:
  python -m gridtable_html.convert document.mdast.json -o document.hast.json
  python -m gridtable_html.convert document.mdast.json --no-header

Without ``--no-header`` the GRIDTABLE_NO_HEADER environment variable (or .env
entry) decides whether header wrappers are suppressed.
"""

import argparse
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path

from gridtable_html.config import options_from_env
from gridtable_html.errors import GridTableError
from gridtable_html.handler import grid_table_handler
from gridtable_html.node_types import TYPE_TABLE
from gridtable_html.schema import HandlerOptions
from gridtable_html.state import BasicState, Handler

logger = logging.getLogger(__name__)


def to_hast(tree: dict, options: HandlerOptions | Mapping | None = None, handlers: dict[str, Handler] | None = None) -> dict:
    """Convert an mdast *tree* into hast, turning every ``gridTable`` into a ``table``.

    Extra *handlers* are registered after the grid-table handler, so a caller
    may also replace it.
    """
    state = BasicState({TYPE_TABLE: grid_table_handler(options), **(handlers or {})})
    result = state.one(tree)
    if isinstance(result, list):
        return {"type": "root", "children": result}
    return result


def load_tree(filepath: Path) -> dict:
    """Load an mdast JSON document from disk."""
    logger.info("Loading mdast tree from %s", filepath)
    with open(filepath, "r", encoding="utf-8") as fopen:
        return json.load(fopen)


def save_tree(tree: dict, filepath: Path) -> None:
    """Write a hast tree as JSON."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as fopen:
        json.dump(tree, fopen, indent=2)
    logger.info("Wrote hast tree to %s", filepath)


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point.  Returns the process exit code."""
    parser = argparse.ArgumentParser(description="Convert an mdast JSON document with grid tables into a hast JSON tree")
    parser.add_argument("input", type=Path, help="Path to the mdast JSON document")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Where to write the hast JSON (default: stdout)")
    parser.add_argument("--no-header", action="store_true", help="Suppress <thead>/<tbody> wrappers when the table has no footer")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    options = HandlerOptions(no_header=True) if args.no_header else options_from_env()

    try:
        tree = load_tree(args.input)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read %s: %s", args.input, exc)
        return 1

    if not isinstance(tree, dict):
        logger.error("Could not convert %s: top level is a JSON %s, expected an mdast node object", args.input, type(tree).__name__)
        return 1

    try:
        result = to_hast(tree, options)
    except GridTableError as exc:
        logger.error("Conversion failed: %s", exc)
        return 1

    if args.output is None:
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        save_tree(result, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
