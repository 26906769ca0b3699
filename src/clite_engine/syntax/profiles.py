"""Highlight profiles and filename-based selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class HighlightProfile:
    """Immutable rule set for one file type.

    ``patterns`` starting with ``.`` must equal the filename's extension;
    any other pattern matches as a substring of the filename.
    """

    name: str
    patterns: tuple[str, ...]
    comment_marker: Optional[bytes] = None
    numbers: bool = False
    strings: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("profile name cannot be empty")
        object.__setattr__(self, "patterns", tuple(self.patterns))
        if self.comment_marker is not None and not self.comment_marker:
            object.__setattr__(self, "comment_marker", None)

    def matches(self, filename: str) -> bool:
        dot = filename.rfind(".")
        extension = filename[dot:] if dot != -1 else None
        for pattern in self.patterns:
            if pattern.startswith("."):
                if extension is not None and extension == pattern:
                    return True
            elif pattern in filename:
                return True
        return False


DEFAULT_PROFILES: tuple[HighlightProfile, ...] = (
    HighlightProfile(
        name="c",
        patterns=(".c", ".h", ".cpp", ".hpp", ".cc"),
        comment_marker=b"//",
        numbers=True,
        strings=True,
    ),
    HighlightProfile(
        name="python",
        patterns=(".py", ".pyi"),
        comment_marker=b"#",
        numbers=True,
        strings=True,
    ),
    HighlightProfile(
        name="javascript",
        patterns=(".js", ".ts"),
        comment_marker=b"//",
        numbers=True,
        strings=True,
    ),
    HighlightProfile(
        name="shell",
        patterns=(".sh", ".bash", "bashrc", "profile"),
        comment_marker=b"#",
        strings=True,
    ),
    HighlightProfile(
        name="makefile",
        patterns=("Makefile", ".mk"),
        comment_marker=b"#",
    ),
)


def select_profile(
    filename: Optional[str],
    profiles: Sequence[HighlightProfile] = DEFAULT_PROFILES,
) -> Optional[HighlightProfile]:
    """First profile matching ``filename``, or ``None``."""

    if not filename:
        return None
    for profile in profiles:
        if profile.matches(filename):
            return profile
    return None


__all__ = ["DEFAULT_PROFILES", "HighlightProfile", "select_profile"]
