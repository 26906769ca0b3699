"""Clamping helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .document import Document

Cursor = Tuple[int, int]  # (row, raw column)


def valid_row(document: "Document", index: int) -> bool:
    return 0 <= index < document.row_count


def clamp_insert_index(document: "Document", at: int) -> int:
    return max(0, min(at, document.row_count))


def clamp_cursor(document: "Document", cursor: Cursor) -> Cursor:
    """Pull a cursor back inside the document.

    The row may sit one past the last row (the empty virtual line an editor
    shows after the end of the file); the column is clamped to that row's
    length.
    """

    row, col = cursor
    row = max(0, min(row, document.row_count))
    target = document.row(row)
    limit = len(target) if target is not None else 0
    return row, max(0, min(col, limit))


__all__ = ["Cursor", "clamp_cursor", "clamp_insert_index", "valid_row"]
