"""Incremental search over rendered rows with a single-row match overlay."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional, Union

from clite_engine.buffer import Document
from clite_engine.keys import DOWN, ENTER, ESC, LEFT, RIGHT, UP, KeyInput
from clite_engine.runtime import telemetry
from clite_engine.syntax import Highlight

FORWARD = 1
BACKWARD = -1

Query = Union[str, bytes]


class SearchState(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"


@dataclass(slots=True)
class SavedOverlay:
    """Highlight array a row had before the match overlay was painted."""

    row: int
    highlight: List[Highlight] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of feeding one keystroke to the engine.

    ``scroll`` asks the caller to bring ``row`` into view; ``render_col`` is
    where the match starts in that row's render form.
    """

    status: Literal["match", "miss", "confirm", "cancel"]
    row: Optional[int] = None
    render_col: Optional[int] = None
    length: int = 0
    scroll: bool = False

    @property
    def finished(self) -> bool:
        return self.status in {"confirm", "cancel"}


def _encode(query: Query) -> bytes:
    if isinstance(query, str):
        return query.encode("utf-8", "surrogateescape")
    return bytes(query)


class SearchEngine:
    """State machine driven by the keystrokes of one search prompt.

    At most one row carries the ``MATCH`` overlay at any time: every
    keystroke restores the previous overlay before anything else happens.
    """

    def __init__(self, document: Document, *, logger_name: str | None = None) -> None:
        self.document = document
        self.state = SearchState.IDLE
        self.last_match: Optional[int] = None
        self.direction = FORWARD
        self._saved: Optional[SavedOverlay] = None
        self._logger_name = logger_name

    @property
    def saved_overlay(self) -> Optional[SavedOverlay]:
        return self._saved

    def begin(self) -> None:
        self.restore_overlay()
        self.last_match = None
        self.direction = FORWARD
        self.state = SearchState.SEARCHING

    def handle_key(self, query: Query, key: KeyInput) -> SearchOutcome:
        self.restore_overlay()

        if key.key in {ENTER, ESC}:
            status: Literal["confirm", "cancel"] = "confirm" if key.key == ENTER else "cancel"
            self.reset()
            telemetry.record_event(
                "search.end", data={"status": status}, logger_name=self._logger_name
            )
            return SearchOutcome(status=status)

        self.state = SearchState.SEARCHING
        if key.key in {RIGHT, DOWN}:
            self.direction = FORWARD
        elif key.key in {LEFT, UP}:
            self.direction = BACKWARD
        else:
            self.last_match = None
            self.direction = FORWARD
        if self.last_match is None:
            self.direction = FORWARD

        return self._scan(_encode(query))

    def restore_overlay(self) -> bool:
        saved = self._saved
        if saved is None:
            return False
        self._saved = None
        row = self.document.row(saved.row)
        if row is not None:
            row.restore_highlight(saved.highlight)
        return True

    def reset(self) -> None:
        self.restore_overlay()
        self.last_match = None
        self.direction = FORWARD
        self.state = SearchState.IDLE

    def _scan(self, needle: bytes) -> SearchOutcome:
        count = self.document.row_count
        if count == 0:
            return SearchOutcome(status="miss")

        with telemetry.span(
            "search::scan",
            logger_name=self._logger_name,
            component="search",
            metadata={"direction": self.direction, "length": len(needle)},
        ) as handle:
            current = self.last_match if self.last_match is not None else -1
            for _ in range(count):
                current += self.direction
                if current == -1:
                    current = count - 1
                elif current == count:
                    current = 0
                row = self.document.row(current)
                if row is None:
                    continue
                start = row.find(needle)
                if start == -1:
                    continue
                self.last_match = current
                self._saved = SavedOverlay(row=current, highlight=row.snapshot_highlight())
                row.overlay(start, len(needle), Highlight.MATCH)
                handle.add_metadata("row", current)
                return SearchOutcome(
                    status="match",
                    row=current,
                    render_col=start,
                    length=len(needle),
                    scroll=True,
                )
            handle.add_metadata("row", "none")
        return SearchOutcome(status="miss")


__all__ = [
    "BACKWARD",
    "FORWARD",
    "SavedOverlay",
    "SearchEngine",
    "SearchOutcome",
    "SearchState",
]
