"""Tab expansion and raw/render column mapping.

Columns are byte indices. A tab advances the render column to the next
multiple of the tab stop; every other byte occupies exactly one column.
"""

from __future__ import annotations

from typing import List, Tuple

from clite_engine.runtime.config import DEFAULT_TAB_STOP

TAB = 0x09

TAB_STOP = DEFAULT_TAB_STOP


def _advance(rx: int, byte: int, tab_stop: int) -> int:
    if byte == TAB:
        return rx + (tab_stop - 1) - (rx % tab_stop) + 1
    return rx + 1


def render(raw: bytes, *, tab_stop: int = TAB_STOP) -> Tuple[bytes, List[int]]:
    """Return the display form of ``raw`` and the render column of each raw byte.

    The map has one extra trailing entry holding the total render width, so
    ``mapping[cx]`` is valid for every ``cx`` in ``[0, len(raw)]``.
    """

    out = bytearray()
    mapping: List[int] = []
    for byte in raw:
        mapping.append(len(out))
        if byte == TAB:
            out.append(0x20)
            while len(out) % tab_stop != 0:
                out.append(0x20)
        else:
            out.append(byte)
    mapping.append(len(out))
    return bytes(out), mapping


def raw_column_to_render_column(raw: bytes, cx: int, *, tab_stop: int = TAB_STOP) -> int:
    rx = 0
    for byte in raw[:cx]:
        rx = _advance(rx, byte, tab_stop)
    return rx


def render_column_to_raw_column(raw: bytes, rx: int, *, tab_stop: int = TAB_STOP) -> int:
    """Raw index whose rendering covers ``rx``; ``len(raw)`` past the end."""

    cur_rx = 0
    for cx, byte in enumerate(raw):
        cur_rx = _advance(cur_rx, byte, tab_stop)
        if cur_rx > rx:
            return cx
    return len(raw)


__all__ = [
    "TAB_STOP",
    "render",
    "raw_column_to_render_column",
    "render_column_to_raw_column",
]
