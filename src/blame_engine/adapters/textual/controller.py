"""Adapter that wires ``Editor`` bus events into Textual-friendly callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from rich.text import Text

from blame_engine.history import Commit
from blame_engine.host import Editor

from .render import render_highlight


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter invokes to update host widgets."""

    update_document: Callable[[Text], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualTrackChangesAdapter:
    """Re-renders the highlighted document whenever the editor changes."""

    EVENTS = (
        "document.change",
        "history.commit",
        "history.revert",
        "highlight.change",
    )

    def __init__(
        self,
        editor: Editor,
        hooks: TextualUIHooks,
        *,
        styles: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.styles = styles
        self._subscribe_events()
        self.refresh()

    def refresh(self) -> Text:
        rendered = render_highlight(
            self.editor.document,
            self.editor.highlight.decorations,
            styles=self.styles,
        )
        self.hooks.update_document(rendered)
        return rendered

    def _subscribe_events(self) -> None:
        for event in self.EVENTS:
            self.editor.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        status = self._status_for(name, payload)
        if status:
            self.hooks.update_status(status)
        self.refresh()

    def _status_for(self, name: str, payload: object | None) -> Optional[str]:
        if name == "history.commit" and isinstance(payload, Commit):
            return f"commit::{payload.message}"
        if name == "history.revert" and isinstance(payload, dict):
            outcome = "ok" if payload.get("ok") else "rejected"
            return f"revert::{outcome}"
        if name == "highlight.change":
            active = self.editor.highlight.active
            return f"highlight::{active.message}" if active else "highlight::off"
        return None

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        history = self.editor.history
        return {
            "editor": self.editor.name,
            "version": self.editor.document.version,
            "commits": len(history.commits),
            "pending": len(history.pending_steps),
            "spans": len(history.attribution),
        }


__all__ = ["TextualTrackChangesAdapter", "TextualUIHooks"]
