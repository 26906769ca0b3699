"""Editing session threading document, cursor, viewport and search together."""

from .bus import SessionBus
from .session import EditorSession, RenderLine, Viewport

__all__ = ["EditorSession", "RenderLine", "SessionBus", "Viewport"]
