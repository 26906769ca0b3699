"""Lexical highlighting for rendered rows."""

from .highlighter import (
    Highlight,
    ansi_color,
    highlight_render,
    is_separator,
    style_name,
)
from .profiles import DEFAULT_PROFILES, HighlightProfile, select_profile

__all__ = [
    "Highlight",
    "HighlightProfile",
    "DEFAULT_PROFILES",
    "ansi_color",
    "highlight_render",
    "is_separator",
    "select_profile",
    "style_name",
]
