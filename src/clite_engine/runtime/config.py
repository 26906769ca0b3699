"""Environment-driven settings shared by the engine and its hosts."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "CLITE_ENGINE_"

DEFAULT_TAB_STOP = 8


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables read once at startup and threaded through the session."""

    tab_stop: int = DEFAULT_TAB_STOP
    screen_rows: int = 24
    screen_cols: int = 80
    quit_times: int = 3

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            object.__setattr__(self, "tab_stop", DEFAULT_TAB_STOP)
        if self.screen_rows < 1:
            object.__setattr__(self, "screen_rows", 1)
        if self.screen_cols < 1:
            object.__setattr__(self, "screen_cols", 1)
        if self.quit_times < 0:
            object.__setattr__(self, "quit_times", 0)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            tab_stop=env_int("TAB_STOP", DEFAULT_TAB_STOP),
            screen_rows=env_int("SCREEN_ROWS", 24),
            screen_cols=env_int("SCREEN_COLS", 80),
            quit_times=env_int("QUIT_TIMES", 3),
        )


__all__ = [
    "DEFAULT_TAB_STOP",
    "ENV_PREFIX",
    "EngineSettings",
    "env",
    "env_flag",
    "env_int",
]
