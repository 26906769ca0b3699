"""One physical line: raw bytes plus derived render and highlight caches."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from clite_engine.syntax import Highlight, HighlightProfile, highlight_render

from .rendering import TAB_STOP, render, render_column_to_raw_column


class Row:
    """Line storage whose derived state is rebuilt on every raw mutation.

    ``render`` and ``highlight`` are read-only views for callers; only the
    mutators below touch ``raw`` and they always call :meth:`update` before
    returning.
    """

    __slots__ = ("raw", "render", "highlight", "_render_map", "_profile", "_tab_stop")

    def __init__(
        self,
        raw: bytes = b"",
        *,
        profile: Optional[HighlightProfile] = None,
        tab_stop: int = TAB_STOP,
    ) -> None:
        self.raw = bytearray(raw)
        self.render = b""
        self.highlight: List[Highlight] = []
        self._render_map: List[int] = [0]
        self._profile = profile
        self._tab_stop = tab_stop
        self.update()

    def __len__(self) -> int:
        return len(self.raw)

    def __repr__(self) -> str:
        return f"Row({bytes(self.raw)!r})"

    @property
    def profile(self) -> Optional[HighlightProfile]:
        return self._profile

    @property
    def render_width(self) -> int:
        return len(self.render)

    def update(self) -> None:
        self.render, self._render_map = render(bytes(self.raw), tab_stop=self._tab_stop)
        self.rehighlight()

    def rehighlight(self) -> None:
        self.highlight = highlight_render(self.render, self._profile)

    def set_profile(self, profile: Optional[HighlightProfile]) -> None:
        self._profile = profile
        self.rehighlight()

    def insert_byte(self, col: int, byte: int) -> None:
        if col < 0 or col > len(self.raw):
            col = len(self.raw)
        self.raw.insert(col, byte)
        self.update()

    def delete_byte(self, col: int) -> bool:
        if col < 0 or col >= len(self.raw):
            return False
        del self.raw[col]
        self.update()
        return True

    def append(self, data: bytes) -> None:
        self.raw.extend(data)
        self.update()

    def truncate(self, col: int) -> bytes:
        """Cut the row at ``col`` and return the removed tail."""

        col = max(0, min(col, len(self.raw)))
        tail = bytes(self.raw[col:])
        del self.raw[col:]
        self.update()
        return tail

    def cx_to_rx(self, cx: int) -> int:
        cx = max(0, min(cx, len(self.raw)))
        return self._render_map[cx]

    def rx_to_cx(self, rx: int) -> int:
        return render_column_to_raw_column(bytes(self.raw), rx, tab_stop=self._tab_stop)

    def find(self, needle: bytes) -> int:
        return self.render.find(needle)

    def render_slice(self, start: int, length: int) -> Tuple[bytes, List[Highlight]]:
        """Index-aligned render bytes and highlight classes for a column range."""

        start = max(0, start)
        stop = max(start, start + max(0, length))
        return self.render[start:stop], self.highlight[start:stop]

    def snapshot_highlight(self) -> List[Highlight]:
        return list(self.highlight)

    def restore_highlight(self, snapshot: Sequence[Highlight]) -> None:
        if len(snapshot) != len(self.render):
            self.rehighlight()
            return
        self.highlight = list(snapshot)

    def overlay(self, start: int, length: int, hl: Highlight) -> None:
        stop = min(len(self.highlight), start + length)
        for index in range(max(0, start), stop):
            self.highlight[index] = hl


__all__ = ["Row"]
