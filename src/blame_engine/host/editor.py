"""High-level editor façade combining document, history and highlight state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from blame_engine.buffer import TextDocument, ensure_range
from blame_engine.config import TrackChangesOptions
from blame_engine.highlight import HighlightState
from blame_engine.history import Commit, HistoryState
from blame_engine.runtime import telemetry
from blame_engine.transform import Transaction

from .commands import (
    TRACK_CHANGES_COMMANDS,
    CommandContext,
    clear_highlight_commit,
    do_commit,
    highlight_commit,
    revert_commit,
)
from .fields import track_changes_fields
from .state import EditorState, StateField


class EditorBus:
    """Minimal event bus hosts subscribe to for change notifications."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Editor:
    """Owns the current ``EditorState`` and replaces it once per transaction."""

    def __init__(
        self,
        state: EditorState,
        *,
        name: str = "default",
        options: Optional[TrackChangesOptions] = None,
        bus: Optional[EditorBus] = None,
    ) -> None:
        self.name = name
        self.options = options or TrackChangesOptions()
        self.bus = bus or EditorBus()
        self._state = state

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        options: Optional[TrackChangesOptions] = None,
        extra_fields: Sequence[StateField[Any]] = (),
    ) -> "Editor":
        opts = options or TrackChangesOptions()
        fields = track_changes_fields(opts) + tuple(extra_fields)
        state = EditorState.create(TextDocument.from_text(text), fields)
        return cls(state, name=name, options=opts)

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def document(self) -> TextDocument:
        return self._state.doc

    @property
    def text(self) -> str:
        return self._state.doc.text

    @property
    def history(self) -> HistoryState:
        return self._state.field(self.options.field_name)

    @property
    def highlight(self) -> HighlightState:
        return self._state.field(self.options.highlight_field_name)

    def transaction(self, *, time: Optional[datetime] = None) -> Transaction:
        return self._state.transaction(time=time)

    def dispatch(self, tr: Transaction) -> EditorState:
        previous = self._state
        with telemetry.span(
            name="editor::dispatch",
            component=True,
            metadata={"editor": self.name, "steps": len(tr.steps)},
        ) as handle:
            self._state = previous.apply(tr)
            handle.add_metadata("version", self._state.doc.version)
            handle.add_metadata("commits", len(self.history.commits))
        self._notify(previous, tr)
        return self._state

    def _notify(self, previous: EditorState, tr: Transaction) -> None:
        if tr.doc_changed:
            self.bus.emit("document.change", tr)
        before = previous.field(self.options.field_name)
        after = self.history
        if len(after.commits) > len(before.commits):
            commit = after.commits[-1]
            telemetry.record_event(
                "history.commit",
                data={"message": commit.message, "index": len(after.commits) - 1},
            )
            self.bus.emit("history.commit", commit)
        if previous.field(self.options.highlight_field_name) is not self.highlight:
            self.bus.emit("highlight.change", self.highlight)

    def replace(
        self, start: int, end: int, text: str = "", *, time: Optional[datetime] = None
    ) -> EditorState:
        ensure_range(self.document, start, end)
        tr = self.transaction(time=time)
        tr.replace(start, end, text)
        return self.dispatch(tr)

    def insert(
        self, pos: int, text: str, *, time: Optional[datetime] = None
    ) -> EditorState:
        return self.replace(pos, pos, text, time=time)

    def delete(
        self, start: int, end: int, *, time: Optional[datetime] = None
    ) -> EditorState:
        return self.replace(start, end, "", time=time)

    def _context(self) -> CommandContext:
        return CommandContext(self._state, self.dispatch, self.options)

    def list_commits(self) -> Tuple[Commit, ...]:
        return self.history.commits

    def commit(self, message: str, *, time: Optional[datetime] = None) -> bool:
        return do_commit(self._context(), message, time=time)

    def revert(self, commit: Commit, *, time: Optional[datetime] = None) -> bool:
        ok = revert_commit(self._context(), commit, time=time)
        self.bus.emit("history.revert", {"message": commit.message, "ok": ok})
        return ok

    def highlight_commit(self, commit: Commit) -> bool:
        return highlight_commit(self._context(), commit)

    def clear_highlight(self, commit: Commit) -> bool:
        return clear_highlight_commit(self._context(), commit)

    def run(self, command: str, *args: Any, **kwargs: Any) -> Any:
        """Run a command from ``TRACK_CHANGES_COMMANDS`` by name."""

        handler = TRACK_CHANGES_COMMANDS.get(command)
        if handler is None:
            raise KeyError(f"Unknown command '{command}'")
        return handler(self._context(), *args, **kwargs)


__all__ = ["Editor", "EditorBus"]
