"""Track-changes commands exposed to hosts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from blame_engine.config import TrackChangesOptions
from blame_engine.highlight import HighlightRequest, HighlightState
from blame_engine.history import Commit, HistoryState, revert_commit as build_revert
from blame_engine.runtime import telemetry
from blame_engine.transform import Transaction

from .state import EditorState

Dispatch = Callable[[Transaction], None]


@dataclass(slots=True)
class CommandContext:
    """What a command may read, plus the optional dispatch callback.

    Without ``dispatch`` a command only reports whether it could run.
    """

    state: EditorState
    dispatch: Optional[Dispatch] = None
    options: TrackChangesOptions = TrackChangesOptions()

    @property
    def history(self) -> HistoryState:
        return self.state.field(self.options.field_name)

    @property
    def highlight(self) -> HighlightState:
        return self.state.field(self.options.highlight_field_name)


def get_commits(ctx: CommandContext) -> Tuple[Commit, ...]:
    return ctx.history.commits


def do_commit(
    ctx: CommandContext, message: str, *, time: Optional[datetime] = None
) -> bool:
    if not message or not ctx.history.has_pending:
        return False
    if ctx.dispatch is not None:
        tr = ctx.state.transaction(time=time)
        tr.set_meta(ctx.options.field_name, message)
        ctx.dispatch(tr)
    return True


def revert_commit(
    ctx: CommandContext, commit: Commit, *, time: Optional[datetime] = None
) -> bool:
    result = build_revert(
        ctx.history, commit, ctx.state.doc, time=time, options=ctx.options
    )
    if not result.ok:
        return False
    if ctx.dispatch is not None and result.transaction is not None:
        if result.transaction.doc_changed:
            ctx.dispatch(result.transaction)
        else:
            telemetry.record_event(
                "revert.empty",
                data={"message": commit.message, "skipped": result.skipped},
            )
    return True


def highlight_commit(ctx: CommandContext, commit: Commit) -> bool:
    if ctx.dispatch is not None:
        tr = ctx.state.transaction()
        tr.set_meta(ctx.options.highlight_field_name, HighlightRequest(add=commit))
        ctx.dispatch(tr)
    return True


def clear_highlight_commit(ctx: CommandContext, commit: Commit) -> bool:
    if ctx.dispatch is not None:
        tr = ctx.state.transaction()
        tr.set_meta(ctx.options.highlight_field_name, HighlightRequest(clear=commit))
        ctx.dispatch(tr)
    return True


CommandHandler = Callable[..., Any]

TRACK_CHANGES_COMMANDS: Dict[str, CommandHandler] = {
    "commits": get_commits,
    "commit": do_commit,
    "revert": revert_commit,
    "highlight": highlight_commit,
    "clear_highlight": clear_highlight_commit,
}


__all__ = [
    "CommandContext",
    "Dispatch",
    "TRACK_CHANGES_COMMANDS",
    "get_commits",
    "do_commit",
    "revert_commit",
    "highlight_commit",
    "clear_highlight_commit",
]
