"""Host bridge that feeds key events into an EditorSession and repaints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from clite_engine.keys import BACKSPACE, ENTER, ESC, KeyInput
from clite_engine.runtime import telemetry
from clite_engine.session import EditorSession, RenderLine


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def _no_writer(filename: str, payload: bytes) -> int:  # pragma: no cover - default hook
    raise OSError(f"no writer configured for {filename}")


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to reach the host UI and filesystem."""

    update_view: Callable[[List[RenderLine], Tuple[int, int]], None]
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    write_file: Callable[[str, bytes], int] = _no_writer
    request_exit: Callable[[], None] = _noop


@dataclass(slots=True)
class _Prompt:
    kind: str  # "search" or "save_as"
    text: str = ""


class TextualEditorAdapter:
    """Routes keys to the session, the search prompt, or save/quit commands."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._prompt: Optional[_Prompt] = None
        self.session.bus.subscribe("document.saved", self._on_saved)
        self.session.bus.subscribe("search.end", self._on_search_end)
        self._refresh()

    @property
    def prompt_text(self) -> Optional[str]:
        return self._prompt.text if self._prompt else None

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> None:
        event = KeyInput(
            key=key,
            text=text,
            modifiers=tuple(str(mod).upper() for mod in modifiers),
        )
        telemetry.record_event(
            "adapter.key",
            level="debug",
            data={"key": event.key, "mods": event.modifiers},
        )
        if self._prompt is not None:
            self._handle_prompt_key(self._prompt, event)
        elif event.is_ctrl and event.key.lower() == "q":
            self._quit()
            self._refresh()
            return
        elif event.is_ctrl and event.key.lower() == "s":
            self.save()
        elif event.is_ctrl and event.key.lower() == "f":
            self.start_search()
        else:
            self.session.handle_edit_key(event)
        self.session.reset_quit_counter()
        self._refresh()

    def start_search(self) -> None:
        self.session.begin_search()
        self._open_prompt("search")

    def save(self) -> None:
        if self.session.filename is None:
            self._open_prompt("save_as")
            return
        self._write(self.session.filename)

    def _handle_prompt_key(self, prompt: _Prompt, event: KeyInput) -> None:
        if event.key == BACKSPACE:
            prompt.text = prompt.text[:-1]
        elif event.is_char() and event.key not in {ENTER, ESC}:
            prompt.text += event.text or ""

        if prompt.kind == "search":
            outcome = self.session.search_key(prompt.text, event)
            if outcome.status == "miss" and prompt.text:
                self.hooks.update_status(f"No match for '{prompt.text}'")
        elif event.key == ESC:
            self._close_prompt()
            self.hooks.update_status("Save aborted")
        elif event.key == ENTER and prompt.text:
            self._close_prompt()
            self._write(prompt.text)

        if self._prompt is not None:
            self._show_prompt()

    def _write(self, filename: str) -> None:
        payload = self.session.save_payload()
        try:
            written = self.hooks.write_file(filename, payload)
        except OSError as exc:
            telemetry.record_event(
                "document.save_failed",
                level="error",
                data={"filename": filename, "error": str(exc)},
            )
            self.hooks.update_status(f"Can't save! I/O error: {exc}")
            return
        self.session.mark_saved(filename, written=written)

    def _quit(self) -> None:
        if self.session.request_quit():
            self.hooks.request_exit()
            return
        times = self.session.quit_warnings_left + 1
        self.hooks.update_status(
            f"WARNING!!! File has unsaved changes. Press Ctrl-Q {times} more times to quit."
        )

    def _on_saved(self, payload: object | None) -> None:
        report = payload if isinstance(payload, dict) else {}
        self.hooks.update_status(
            f"{report.get('bytes', 0)} bytes written to {report.get('filename')}"
        )

    def _on_search_end(self, status: object | None) -> None:
        del status
        if self._prompt is not None and self._prompt.kind == "search":
            self._close_prompt()

    def _open_prompt(self, kind: str) -> None:
        self._prompt = _Prompt(kind=kind)
        self._show_prompt()

    def _close_prompt(self) -> None:
        self._prompt = None
        self.hooks.show_prompt("")

    def _show_prompt(self) -> None:
        prompt = self._prompt
        if prompt is None:
            return
        if prompt.kind == "search":
            self.hooks.show_prompt(f"Search: {prompt.text} (Use ESC/Arrows/Enter)")
        else:
            self.hooks.show_prompt(f"Save as: {prompt.text} (ESC to cancel)")

    def _refresh(self) -> None:
        self.session.scroll()
        self.hooks.update_view(self.session.visible_window(), self.session.screen_cursor())


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
