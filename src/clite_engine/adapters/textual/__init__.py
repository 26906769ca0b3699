"""Textual host for the editor core.

Only the controller is imported eagerly; ``app`` needs the optional
``textual`` dependency.
"""

from .controller import TextualEditorAdapter, TextualUIHooks

__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
