"""Executable Textual app that hosts an EditorSession."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use clite_engine.adapters.textual.app"
    ) from exc

from clite_engine.runtime import telemetry
from clite_engine.runtime.config import EngineSettings, env
from clite_engine.session import EditorSession, RenderLine
from clite_engine.syntax import style_name

from .controller import TextualEditorAdapter, TextualUIHooks

HELP = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


def _line_to_text(line: RenderLine, cursor_col: Optional[int]) -> Text:
    if line.row is None:
        return Text("~", style="dim")
    text = Text()
    for col, (byte, hl) in enumerate(zip(line.text, line.highlight)):
        char = chr(byte) if 32 <= byte < 127 else "?"
        style = style_name(hl)
        if col == cursor_col:
            style = f"{style} reverse" if style != "default" else "reverse"
        text.append(char, style=None if style == "default" else style)
    if cursor_col is not None and cursor_col >= len(line.text):
        text.append(" " * (cursor_col - len(line.text)))
        text.append(" ", style="reverse")
    return text


def read_lines(path: Path) -> List[bytes]:
    return path.read_bytes().splitlines()


def write_payload(filename: str, payload: bytes) -> int:
    Path(filename).write_bytes(payload)
    return len(payload)


class CliteApp(App[None]):
    """Single-buffer editor window: text area, status bar, and prompt line."""

    # Replaces App's priority ctrl+q binding so quits go through the session.
    BINDINGS = [Binding("ctrl+q", "request_quit", show=False, priority=True)]

    CSS = """
	Screen {
		layout: vertical;
	}

	#text-area {
		height: 1fr;
	}

	#status-bar {
		height: 1;
		background: $surface-darken-1;
	}

	#message-bar {
		height: 1;
	}
	"""

    def __init__(self, filename: Optional[str] = None) -> None:
        super().__init__()
        self.session = EditorSession(settings=EngineSettings.from_env())
        self.adapter: TextualEditorAdapter | None = None
        self._filename = filename
        self._text_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None
        self._message = HELP

    def compose(self) -> ComposeResult:
        self._text_widget = Static("", id="text-area")
        self._status_widget = Static("", id="status-bar")
        self._message_widget = Static(self._message, id="message-bar")
        yield self._text_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        if self._filename:
            path = Path(self._filename)
            try:
                lines = read_lines(path) if path.exists() else []
            except OSError as exc:
                lines = []
                self._set_message(f"Can't open {path}: {exc}")
            self.session.load(lines, filename=self._filename)
        self._fit_to_screen()
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._set_message,
            show_prompt=self._show_prompt,
            write_file=write_payload,
            request_exit=self.exit,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._fit_to_screen()
        if self.adapter:
            self._update_view(self.session.visible_window(), self.session.screen_cursor())

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key, text, modifiers = self._normalize_key(event)
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def action_request_quit(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("q", modifiers=("CTRL",))
        else:
            self.exit()

    def _fit_to_screen(self) -> None:
        width, height = self.size
        self.session.resize(max(1, height - 2), max(1, width))

    def _update_view(self, lines: List[RenderLine], cursor: Tuple[int, int]) -> None:
        cursor_row, cursor_col = cursor
        body = Text("\n").join(
            _line_to_text(line, cursor_col if index == cursor_row else None)
            for index, line in enumerate(lines)
        )
        if self._text_widget:
            self._text_widget.update(body)
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        session = self.session
        name = session.filename or "[No Name]"
        modified = " (modified)" if session.dirty else ""
        left = f"{name[:20]} - {session.document.row_count} lines{modified}"
        profile = session.document.active_profile
        right = f"{profile.name if profile else 'no ft'} | {session.cy + 1}/{session.document.row_count}"
        if self._status_widget:
            self._status_widget.update(Text(f"{left}  {right}", style="reverse"))

    def _set_message(self, message: str) -> None:
        self._message = message
        if self._message_widget:
            self._message_widget.update(message)

    def _show_prompt(self, prompt: str) -> None:
        self._set_message(prompt or HELP)

    @staticmethod
    def _normalize_key(event: events.Key) -> Tuple[str, Optional[str], Tuple[str, ...]]:
        key = event.key
        if key.startswith("ctrl+"):
            return (key[len("ctrl+"):], None, ("CTRL",))
        if key == "escape":
            return ("ESC", None, ())
        if key in {"enter", "return"}:
            return ("ENTER", None, ())
        if key == "tab":
            return ("TAB", "\t", ())
        if key in {"backspace", "delete", "left", "right", "up", "down", "home", "end", "pageup", "pagedown"}:
            return (key.upper(), None, ())
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file in the terminal.")
    parser.add_argument("filename", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        default=env("LOG_PRESET", "production"),
        choices=("development", "production"),
        help="Telemetry preset (default: production, logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    CliteApp(filename=args.filename).run()


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
