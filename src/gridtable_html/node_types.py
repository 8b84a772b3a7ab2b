"""Node type names for grid-table trees and the cell properties copied to output cells."""

# Input (mdast) node types produced by the grid-table parser
TYPE_TABLE = "gridTable"
TYPE_HEADER = "gtHeader"
TYPE_BODY = "gtBody"
TYPE_FOOTER = "gtFooter"
TYPE_ROW = "gtRow"
TYPE_CELL = "gtCell"

# Cell keys projected onto the output element, in output order
CELL_PROPERTIES = ("colSpan", "rowSpan", "align", "valign")

# Output (hast) cell tag names
HEADER_CELL_TAG = "th"
DATA_CELL_TAG = "td"
