"""Row storage, tab rendering, and the document model."""

from .document import Document
from .rendering import (
    TAB_STOP,
    raw_column_to_render_column,
    render,
    render_column_to_raw_column,
)
from .row import Row
from .validation import Cursor, clamp_cursor, clamp_insert_index, valid_row

__all__ = [
    "Cursor",
    "Document",
    "Row",
    "TAB_STOP",
    "clamp_cursor",
    "clamp_insert_index",
    "raw_column_to_render_column",
    "render",
    "render_column_to_raw_column",
    "valid_row",
]
