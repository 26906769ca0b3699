"""Editing session: document, cursor, viewport, and search state in one object."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from clite_engine.buffer import Cursor, Document, clamp_cursor
from clite_engine.keys import (
    BACKSPACE,
    DELETE,
    DOWN,
    END,
    ENTER,
    HOME,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    RIGHT,
    UP,
    KeyInput,
)
from clite_engine.runtime import telemetry
from clite_engine.runtime.config import EngineSettings
from clite_engine.search import SearchEngine, SearchOutcome
from clite_engine.syntax import DEFAULT_PROFILES, Highlight, HighlightProfile, select_profile

from .bus import SessionBus

Line = Union[str, bytes]


@dataclass(slots=True)
class Viewport:
    row_offset: int = 0
    col_offset: int = 0
    screen_rows: int = 24
    screen_cols: int = 80


@dataclass(slots=True)
class RenderLine:
    """One screen line: ``row`` is ``None`` past the end of the document."""

    row: Optional[int]
    text: bytes = b""
    highlight: List[Highlight] = field(default_factory=list)


@dataclass(slots=True)
class _SearchOrigin:
    cursor: Cursor
    row_offset: int
    col_offset: int


def _to_bytes(line: Line) -> bytes:
    if isinstance(line, str):
        data = line.encode("utf-8", "surrogateescape")
    else:
        data = bytes(line)
    return data.rstrip(b"\r\n")


class EditorSession:
    """Explicit editor context threaded through every host call."""

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        profiles: Sequence[HighlightProfile] = DEFAULT_PROFILES,
        bus: Optional[SessionBus] = None,
    ) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.profiles = tuple(profiles)
        self.bus = bus or SessionBus()
        self.filename: Optional[str] = None
        self.document = Document(tab_stop=self.settings.tab_stop)
        self.search = SearchEngine(self.document, logger_name="clite_engine.search")
        self.viewport = Viewport(
            screen_rows=self.settings.screen_rows,
            screen_cols=self.settings.screen_cols,
        )
        self.cy = 0
        self.cx = 0
        self.rx = 0
        self._quit_remaining = self.settings.quit_times
        self._search_origin: Optional[_SearchOrigin] = None

    @property
    def cursor(self) -> Cursor:
        return self.cy, self.cx

    @property
    def dirty(self) -> int:
        return self.document.dirty

    @property
    def quit_warnings_left(self) -> int:
        return self._quit_remaining

    # -- load / save boundary -------------------------------------------------

    def load(self, lines: Iterable[Line], filename: Optional[str] = None) -> None:
        """Replace the document with ``lines`` (newlines already split off)."""

        self.search.reset()
        self.filename = filename
        profile = select_profile(filename, self.profiles)
        with telemetry.span(
            "session::load",
            component="session",
            metadata={"filename": filename or ""},
        ) as handle:
            self.document = Document.from_lines(
                (_to_bytes(line) for line in lines),
                profile=profile,
                tab_stop=self.settings.tab_stop,
                name=filename or "untitled",
            )
            handle.add_metadata("rows", self.document.row_count)
        self.search = SearchEngine(self.document, logger_name="clite_engine.search")
        self.cy = self.cx = self.rx = 0
        self.viewport.row_offset = self.viewport.col_offset = 0
        self._quit_remaining = self.settings.quit_times
        self._search_origin = None
        self.bus.emit("document.loaded", filename)

    def select_profile(self, filename: Optional[str]) -> Optional[HighlightProfile]:
        profile = select_profile(filename, self.profiles)
        if profile is not self.document.active_profile:
            self.document.set_profile(profile)
        return profile

    def save_payload(self) -> bytes:
        return self.document.to_flat_text()

    def mark_saved(self, filename: Optional[str] = None, *, written: int = 0) -> None:
        """Record a successful write performed by the host."""

        if filename is not None and filename != self.filename:
            self.filename = filename
            self.document.name = filename
            self.select_profile(filename)
        self.document.mark_clean()
        telemetry.record_event(
            "document.saved",
            data={"filename": self.filename or "", "bytes": written},
        )
        self.bus.emit("document.saved", {"filename": self.filename, "bytes": written})

    # -- viewport -------------------------------------------------------------

    def resize(self, rows: int, cols: int) -> None:
        self.viewport.screen_rows = max(1, rows)
        self.viewport.screen_cols = max(1, cols)
        self.scroll()

    def render_cursor(self) -> int:
        row = self.document.row(self.cy)
        return row.cx_to_rx(self.cx) if row is not None else 0

    def scroll(self) -> None:
        view = self.viewport
        self.rx = self.render_cursor()
        if self.cy < view.row_offset:
            view.row_offset = self.cy
        if self.cy >= view.row_offset + view.screen_rows:
            view.row_offset = self.cy - view.screen_rows + 1
        if self.rx < view.col_offset:
            view.col_offset = self.rx
        if self.rx >= view.col_offset + view.screen_cols:
            view.col_offset = self.rx - view.screen_cols + 1

    def screen_cursor(self) -> Tuple[int, int]:
        """Terminal cursor position (row, col) inside the text area."""

        return self.cy - self.viewport.row_offset, self.rx - self.viewport.col_offset

    def visible_window(self) -> List[RenderLine]:
        view = self.viewport
        lines: List[RenderLine] = []
        for y in range(view.screen_rows):
            index = view.row_offset + y
            row = self.document.row(index)
            if row is None:
                lines.append(RenderLine(row=None))
                continue
            text, highlight = row.render_slice(view.col_offset, view.screen_cols)
            lines.append(RenderLine(row=index, text=text, highlight=highlight))
        return lines

    # -- cursor movement ------------------------------------------------------

    def move_cursor(self, key: str) -> None:
        row = self.document.row(self.cy)
        if key == LEFT:
            if self.cx != 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                previous = self.document.row(self.cy)
                self.cx = len(previous) if previous is not None else 0
        elif key == RIGHT:
            if row is not None and self.cx < len(row):
                self.cx += 1
            elif row is not None and self.cx == len(row):
                self.cy += 1
                self.cx = 0
        elif key == UP:
            if self.cy != 0:
                self.cy -= 1
        elif key == DOWN:
            if self.cy < self.document.row_count:
                self.cy += 1
        elif key == HOME:
            self.cx = 0
        elif key == END:
            if row is not None:
                self.cx = len(row)
        elif key in {PAGE_UP, PAGE_DOWN}:
            view = self.viewport
            if key == PAGE_UP:
                self.cy = view.row_offset
            else:
                self.cy = min(view.row_offset + view.screen_rows - 1, self.document.row_count)
            step = UP if key == PAGE_UP else DOWN
            for _ in range(view.screen_rows):
                self.move_cursor(step)
            return
        self.cy, self.cx = clamp_cursor(self.document, (self.cy, self.cx))

    # -- editing --------------------------------------------------------------

    def insert_char(self, byte: int) -> None:
        if self.cy == self.document.row_count:
            self.document.insert_row(self.document.row_count, b"")
        self.document.insert_char(self.cy, self.cx, byte)
        self.cx += 1

    def insert_text(self, text: Line) -> None:
        for byte in _to_bytes(text):
            self.insert_char(byte)

    def insert_newline(self) -> None:
        if self.cx == 0:
            self.document.insert_row(self.cy, b"")
        else:
            self.document.split_row(self.cy, self.cx)
        self.cy += 1
        self.cx = 0

    def delete_char(self) -> None:
        """Backspace: remove the byte left of the cursor or join lines."""

        if self.cy == self.document.row_count:
            return
        if self.cx == 0 and self.cy == 0:
            return
        if self.cx > 0:
            self.document.delete_char(self.cy, self.cx - 1)
            self.cx -= 1
            return
        join_at = self.document.merge_with_previous(self.cy)
        if join_at is not None:
            self.cy -= 1
            self.cx = join_at

    def handle_edit_key(self, key: KeyInput) -> bool:
        """Apply an editing or movement key; returns False when unhandled."""

        name = key.key
        if name == ENTER:
            self.insert_newline()
        elif name == BACKSPACE:
            self.delete_char()
        elif name == DELETE:
            self.move_cursor(RIGHT)
            self.delete_char()
        elif name in {LEFT, RIGHT, UP, DOWN, HOME, END, PAGE_UP, PAGE_DOWN}:
            self.move_cursor(name)
        elif key.is_char():
            self.insert_text(key.text or "")
        else:
            return False
        self.reset_quit_counter()
        self.scroll()
        return True

    # -- quit confirmation ----------------------------------------------------

    def request_quit(self) -> bool:
        if self.document.dirty and self._quit_remaining > 0:
            self._quit_remaining -= 1
            return False
        return True

    def reset_quit_counter(self) -> None:
        self._quit_remaining = self.settings.quit_times

    # -- search ---------------------------------------------------------------

    @property
    def searching(self) -> bool:
        return self._search_origin is not None

    def begin_search(self) -> None:
        self._search_origin = _SearchOrigin(
            cursor=self.cursor,
            row_offset=self.viewport.row_offset,
            col_offset=self.viewport.col_offset,
        )
        self.search.begin()

    def search_key(self, query: Line, key: KeyInput) -> SearchOutcome:
        if self._search_origin is None:
            self.begin_search()
        outcome = self.search.handle_key(query, key)

        if outcome.status == "match" and outcome.row is not None:
            row = self.document.row(outcome.row)
            self.cy = outcome.row
            self.cx = row.rx_to_cx(outcome.render_col or 0) if row is not None else 0
            # Past-the-end offset makes scroll() pin the match to the top line.
            self.viewport.row_offset = self.document.row_count
            self.scroll()
        elif outcome.finished:
            origin = self._search_origin
            self._search_origin = None
            if outcome.status == "cancel" and origin is not None:
                self.cy, self.cx = clamp_cursor(self.document, origin.cursor)
                self.viewport.row_offset = origin.row_offset
                self.viewport.col_offset = origin.col_offset
                self.rx = self.render_cursor()
            self.bus.emit("search.end", outcome.status)
        return outcome


__all__ = ["EditorSession", "RenderLine", "Viewport"]
