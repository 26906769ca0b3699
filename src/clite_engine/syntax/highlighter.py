"""Single-pass comment/string/number scanner over a row's render bytes."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .profiles import HighlightProfile


class Highlight(IntEnum):
    NORMAL = 0
    COMMENT = 1
    STRING = 2
    NUMBER = 3
    MATCH = 4


# ANSI SGR foreground codes used by terminal compositors.
_ANSI_COLORS = {
    Highlight.COMMENT: 36,
    Highlight.STRING: 35,
    Highlight.NUMBER: 31,
    Highlight.MATCH: 34,
}

# Named colours for hosts that style with rich/Textual markup.
_STYLE_NAMES = {
    Highlight.COMMENT: "cyan",
    Highlight.STRING: "magenta",
    Highlight.NUMBER: "red",
    Highlight.MATCH: "blue",
}

SEPARATORS = frozenset(b",.()+-/*=~%<>[];")

_WHITESPACE = frozenset(b" \t\n\v\f\r")
_DIGITS = frozenset(b"0123456789")

_QUOTES = frozenset(b"\"'")
_BACKSLASH = ord("\\")
_DOT = ord(".")


def ansi_color(hl: Highlight) -> int:
    return _ANSI_COLORS.get(hl, 37)


def style_name(hl: Highlight) -> str:
    return _STYLE_NAMES.get(hl, "default")


def is_separator(byte: int) -> bool:
    return byte == 0 or byte in _WHITESPACE or byte in SEPARATORS


def highlight_render(render: bytes, profile: Optional["HighlightProfile"]) -> List[Highlight]:
    """Classify every byte of ``render`` under ``profile``.

    Precedence per position is comment, then string, then number. Comments run
    to the end of the row. Inside a string a backslash claims the next byte.
    """

    hl = [Highlight.NORMAL] * len(render)
    if profile is None:
        return hl

    marker = profile.comment_marker or b""
    prev_sep = True
    in_string = 0
    i = 0
    size = len(render)
    while i < size:
        byte = render[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if marker and not in_string and render.startswith(marker, i):
            hl[i:] = [Highlight.COMMENT] * (size - i)
            break

        if profile.strings:
            if in_string:
                hl[i] = Highlight.STRING
                if byte == _BACKSLASH and i + 1 < size:
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue
                if byte == in_string:
                    in_string = 0
                i += 1
                prev_sep = True
                continue
            if byte in _QUOTES:
                in_string = byte
                hl[i] = Highlight.STRING
                i += 1
                continue

        if profile.numbers:
            if (byte in _DIGITS and (prev_sep or prev_hl == Highlight.NUMBER)) or (
                byte == _DOT and prev_hl == Highlight.NUMBER
            ):
                hl[i] = Highlight.NUMBER
                i += 1
                prev_sep = False
                continue

        prev_sep = is_separator(byte)
        i += 1

    return hl


__all__ = [
    "Highlight",
    "SEPARATORS",
    "ansi_color",
    "highlight_render",
    "is_separator",
    "style_name",
]
