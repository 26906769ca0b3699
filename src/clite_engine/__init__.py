"""Terminal text-buffer core: rows, tab rendering, highlighting, and search."""

__all__ = [
    "adapters",
    "buffer",
    "keys",
    "runtime",
    "search",
    "session",
    "syntax",
]

__version__ = "0.1.0"
