"""Convert a ``gridTable`` node into a hast ``table`` element.

The table is assembled from its direct children in one pass:

  gtHeader  -> header rows (cells become <th>)
  gtBody    -> body rows   (cells become <td>)
  gtFooter  -> footer rows (cells become <td>)
  gtRow     -> appended to the body rows

Rows are then grouped into <thead>, <tbody> and <tfoot> (each only when it
has rows, always in that order).  With ``noHeader`` set and no footer rows,
the wrappers are dropped and header rows are followed directly by body rows
under <table>.  A footer always keeps the full grouping, even with
``noHeader``.

A later section of the same kind replaces the rows of an earlier one.

Every produced cell, row and table is patched with the provenance of the node
it came from.  Text inside cells has its line breaks collapsed to single
spaces, except inside <code> elements.
"""

import logging
import re
from collections.abc import Mapping
from typing import Callable

from gridtable_html.node_types import (
    CELL_PROPERTIES,
    DATA_CELL_TAG,
    HEADER_CELL_TAG,
    TYPE_BODY,
    TYPE_CELL,
    TYPE_FOOTER,
    TYPE_HEADER,
    TYPE_ROW,
)
from gridtable_html.schema import HandlerOptions
from gridtable_html.state import ConversionState, element
from gridtable_html.visit import Action, visit

logger = logging.getLogger(__name__)

# Soft line break inside cell text
NEWLINE_RE = re.compile(r"\r?\n")

_SECTION_TYPES = (TYPE_HEADER, TYPE_BODY, TYPE_FOOTER)


# ─── Cells ────────────────────────────────────────────────────────────────────


def _is_type(node, node_type: str) -> bool:
    """Return True if *node* is a node dict of the given type."""
    return isinstance(node, dict) and node.get("type") == node_type


def _cell_properties(node: dict) -> dict:
    """Copy the span/alignment keys that are present on the cell (presence, not truthiness)."""
    return {name: node[name] for name in CELL_PROPERTIES if name in node}


def _unwrap_single_paragraph(node: dict) -> dict:
    """Return the cell with a lone paragraph replaced by the paragraph's children.

    The input node is left untouched; a shallow copy is returned when unwrapping applies.
    """
    children = node.get("children") or []
    if len(children) == 1 and _is_type(children[0], "paragraph"):
        return {**node, "children": children[0].get("children") or []}
    return node


def _collapse_newlines(node: dict, _index: int | None, _parent: dict | None) -> Action:
    """Visitor: join soft-wrapped text onto one line, leaving code untouched."""
    if node.get("tagName") == "code":
        return Action.SKIP
    if node.get("type") == "text" and isinstance(node.get("value"), str):
        node["value"] = NEWLINE_RE.sub(" ", node["value"])
    return Action.CONTINUE


def handle_cell(state: ConversionState, node: dict, cell_tag: str) -> dict:
    """Convert a ``gtCell`` into a ``th``/``td`` element."""
    content = _unwrap_single_paragraph(node)
    cell = element(cell_tag, state.all(content), _cell_properties(node))
    state.patch(node, cell)
    visit(cell, _collapse_newlines)
    return cell


# ─── Rows ─────────────────────────────────────────────────────────────────────


def handle_row(state: ConversionState, node: dict, cell_tag: str) -> dict:
    """Convert a ``gtRow`` into a ``tr`` element; children that are not cells are skipped."""
    cells = [handle_cell(state, child, cell_tag) for child in node.get("children") or [] if _is_type(child, TYPE_CELL)]
    row = element("tr", cells)
    state.patch(node, row)
    return row


def create_rows(state: ConversionState, node: dict, cell_tag: str) -> list[dict]:
    """Convert the ``gtRow`` children of a section, in order."""
    return [handle_row(state, child, cell_tag) for child in node.get("children") or [] if _is_type(child, TYPE_ROW)]


# ─── Table ────────────────────────────────────────────────────────────────────


def _group_rows(header_rows: list[dict], body_rows: list[dict], footer_rows: list[dict], no_header: bool) -> list[dict]:
    """Arrange the converted rows into the table's children."""
    if no_header and not footer_rows:
        return [*header_rows, *body_rows]

    groups = []
    for tag_name, rows in (("thead", header_rows), ("tbody", body_rows), ("tfoot", footer_rows)):
        if rows:
            groups.append(element(tag_name, rows))
    return groups


def _resolve_options(options: HandlerOptions | Mapping | None) -> HandlerOptions:
    """Accept a HandlerOptions, a plain mapping (``noHeader`` / ``no_header``), or None."""
    if options is None:
        return HandlerOptions()
    if isinstance(options, HandlerOptions):
        return options
    return HandlerOptions.model_validate(dict(options))


def grid_table_handler(options: HandlerOptions | Mapping | None = None) -> Callable[[ConversionState, dict], dict]:
    """Return a handler converting ``gridTable`` nodes into ``table`` elements.

    The returned callable has the signature ``handle_table(state, node)`` and
    can be registered under the ``gridTable`` node type of a conversion
    context.  Raises pydantic ``ValidationError`` if *options* are invalid.
    """
    no_header = _resolve_options(options).no_header

    def handle_table(state: ConversionState, node: dict) -> dict:
        header_rows: list[dict] = []
        body_rows: list[dict] = []
        footer_rows: list[dict] = []
        seen_sections: set[str] = set()

        for child in node.get("children") or []:
            child_type = child.get("type") if isinstance(child, dict) else None
            if child_type in _SECTION_TYPES:
                if child_type in seen_sections:
                    logger.warning("Table has more than one %s section; the later one replaces the earlier rows", child_type)
                seen_sections.add(child_type)

            if child_type == TYPE_HEADER:
                header_rows = create_rows(state, child, HEADER_CELL_TAG)
            elif child_type == TYPE_BODY:
                body_rows = create_rows(state, child, DATA_CELL_TAG)
            elif child_type == TYPE_FOOTER:
                footer_rows = create_rows(state, child, DATA_CELL_TAG)
            elif child_type == TYPE_ROW:
                body_rows.append(handle_row(state, child, DATA_CELL_TAG))

        table = element("table", _group_rows(header_rows, body_rows, footer_rows, no_header))
        state.patch(node, table)
        logger.debug(
            "Converted grid table: %d header, %d body, %d footer rows (%s)",
            len(header_rows),
            len(body_rows),
            len(footer_rows),
            "flat" if no_header and not footer_rows else "grouped",
        )
        return table

    return handle_table
