"""Ordered row storage with coherent render/highlight caches."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from clite_engine.runtime import telemetry
from clite_engine.syntax import HighlightProfile

from .rendering import TAB_STOP
from .row import Row
from .validation import clamp_insert_index, valid_row


class Document:
    """Rows of a single file plus the profile that colours them.

    Every mutator is synchronous and leaves each row's derived caches
    consistent with its raw bytes. Out-of-range indices are clamped or turn
    the call into a no-op; nothing here raises for bad positions.
    """

    def __init__(
        self,
        *,
        profile: Optional[HighlightProfile] = None,
        tab_stop: int = TAB_STOP,
        name: str = "untitled",
    ) -> None:
        self.name = name
        self.dirty = 0
        self._rows: List[Row] = []
        self._profile = profile
        self._tab_stop = tab_stop

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[bytes],
        *,
        profile: Optional[HighlightProfile] = None,
        tab_stop: int = TAB_STOP,
        name: str = "untitled",
    ) -> "Document":
        document = cls(profile=profile, tab_stop=tab_stop, name=name)
        for line in lines:
            document.insert_row(document.row_count, line)
        document.dirty = 0
        return document

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def tab_stop(self) -> int:
        return self._tab_stop

    @property
    def active_profile(self) -> Optional[HighlightProfile]:
        return self._profile

    def row(self, index: int) -> Optional[Row]:
        if not valid_row(self, index):
            return None
        return self._rows[index]

    def set_profile(self, profile: Optional[HighlightProfile]) -> None:
        self._profile = profile
        for row in self._rows:
            row.set_profile(profile)
        telemetry.record_event(
            "document.profile",
            data={"document": self.name, "profile": profile.name if profile else None},
        )

    def insert_row(self, at: int, data: bytes) -> Row:
        at = clamp_insert_index(self, at)
        with self._edit("insert_row", at):
            row = Row(data, profile=self._profile, tab_stop=self._tab_stop)
            self._rows.insert(at, row)
        return row

    def delete_row(self, at: int) -> bool:
        if not valid_row(self, at):
            return False
        with self._edit("delete_row", at):
            del self._rows[at]
        return True

    def insert_char(self, row: int, col: int, byte: int) -> bool:
        if not valid_row(self, row):
            return False
        with self._edit("insert_char", row):
            self._rows[row].insert_byte(col, byte)
        return True

    def delete_char(self, row: int, col: int) -> bool:
        target = self.row(row)
        if target is None or col < 0 or col >= len(target):
            return False
        with self._edit("delete_char", row):
            target.delete_byte(col)
        return True

    def split_row(self, row: int, col: int) -> bool:
        target = self.row(row)
        if target is None:
            return False
        with self._edit("split_row", row):
            tail = target.truncate(col)
            self._rows.insert(
                row + 1, Row(tail, profile=self._profile, tab_stop=self._tab_stop)
            )
        return True

    def merge_with_previous(self, row: int) -> Optional[int]:
        """Append row ``row`` onto its predecessor and drop it.

        Returns the raw column in the previous row where the joined text
        starts, or ``None`` when there is no previous row.
        """

        if row <= 0 or not valid_row(self, row):
            return None
        previous = self._rows[row - 1]
        join_at = len(previous)
        with self._edit("merge_with_previous", row):
            previous.append(bytes(self._rows[row].raw))
            del self._rows[row]
        return join_at

    def to_flat_text(self) -> bytes:
        return b"".join(bytes(row.raw) + b"\n" for row in self._rows)

    def lines(self) -> List[bytes]:
        return [bytes(row.raw) for row in self._rows]

    def mark_clean(self) -> None:
        self.dirty = 0

    @contextmanager
    def _edit(self, label: str, row: int) -> Iterator[None]:
        with telemetry.span(
            f"document::{label}",
            component="document",
            metadata={"document": self.name, "row": row},
        ):
            yield
        self.dirty += 1


__all__ = ["Document"]
