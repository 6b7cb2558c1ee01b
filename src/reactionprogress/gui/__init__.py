"""GUI package for Reaction Progress."""

from reactionprogress.gui.tables import (
    TableRow,
    column_headers,
    extent_text_edited,
    format_number,
    table_rows,
)

__all__ = [
    "TableRow",
    "column_headers",
    "extent_text_edited",
    "format_number",
    "table_rows",
]
