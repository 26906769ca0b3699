"""Incremental search with match overlay/restore."""

from .engine import (
    BACKWARD,
    FORWARD,
    SavedOverlay,
    SearchEngine,
    SearchOutcome,
    SearchState,
)

__all__ = [
    "BACKWARD",
    "FORWARD",
    "SavedOverlay",
    "SearchEngine",
    "SearchOutcome",
    "SearchState",
]
