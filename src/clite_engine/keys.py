"""Logical key events delivered by the host after escape decoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGEUP"
PAGE_DOWN = "PAGEDOWN"
ENTER = "ENTER"
ESC = "ESC"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"

ARROWS = frozenset({LEFT, RIGHT, UP, DOWN})


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event passed to the session and search engine."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def is_ctrl(self) -> bool:
        return "CTRL" in self.modifiers

    def is_char(self) -> bool:
        return bool(self.text) and not self.is_ctrl


__all__ = [
    "ARROWS",
    "BACKSPACE",
    "DELETE",
    "DOWN",
    "END",
    "ENTER",
    "ESC",
    "HOME",
    "KeyInput",
    "LEFT",
    "PAGE_DOWN",
    "PAGE_UP",
    "RIGHT",
    "UP",
]
