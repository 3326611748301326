"""State fields wiring history tracking and highlighting into ``EditorState``."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from blame_engine.config import TrackChangesOptions
from blame_engine.highlight import HighlightRequest, HighlightState, apply_highlight
from blame_engine.history import HistoryState
from blame_engine.transform import Transaction

from .state import EditorState, StateField


def history_field(
    options: Optional[TrackChangesOptions] = None,
) -> StateField[HistoryState]:
    opts = options or TrackChangesOptions()

    def apply(
        tr: Transaction,
        tracked: HistoryState,
        old_state: EditorState,
        new_state: EditorState,
    ) -> HistoryState:
        del old_state, new_state
        if tr.doc_changed:
            tracked = tracked.apply_transform(tr)
        message = tr.get_meta(opts.field_name)
        if message:
            tracked = tracked.apply_commit(str(message), tr.time)
        return tracked

    return StateField(name=opts.field_name, init=HistoryState.init, apply=apply)


def highlight_field(
    options: Optional[TrackChangesOptions] = None,
) -> StateField[HighlightState]:
    """Overlay field; must be declared after the history field it reads."""

    opts = options or TrackChangesOptions()

    def apply(
        tr: Transaction,
        previous: HighlightState,
        old_state: EditorState,
        new_state: EditorState,
    ) -> HighlightState:
        del old_state
        request = tr.get_meta(opts.highlight_field_name)
        if request is not None and not isinstance(request, HighlightRequest):
            raise TypeError("highlight meta must be a HighlightRequest")
        return apply_highlight(
            previous,
            request,
            tr,
            new_state.field(opts.field_name),
            style=opts.highlight_class,
        )

    return StateField(
        name=opts.highlight_field_name,
        init=lambda _doc: HighlightState(),
        apply=apply,
    )


def track_changes_fields(
    options: Optional[TrackChangesOptions] = None,
) -> Tuple[StateField[Any], ...]:
    opts = options or TrackChangesOptions()
    return (history_field(opts), highlight_field(opts))


__all__ = ["history_field", "highlight_field", "track_changes_fields"]
