"""Convert grid-table syntax trees (mdast) into HTML element trees (hast).

Submodules:
  node_types -- node type names and recognised cell properties
  errors     -- exception hierarchy
  schema     -- HandlerOptions Pydantic model
  config     -- project root, .env loading, options from environment
  visit      -- depth-first tree traversal with CONTINUE / SKIP / EXIT control
  state      -- conversion context protocol and the BasicState implementation
  handler    -- gridTable -> table conversion (cells, rows, sections)
  convert    -- to_hast() entry point and command-line interface
"""

from gridtable_html.handler import grid_table_handler
from gridtable_html.schema import HandlerOptions

__all__ = ["HandlerOptions", "grid_table_handler"]
