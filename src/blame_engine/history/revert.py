"""Selective revert of a single historical commit."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from blame_engine.buffer import TextDocument
from blame_engine.config import TrackChangesOptions
from blame_engine.runtime import telemetry
from blame_engine.transform import Mapping, Transaction

from .commit import Commit
from .state import HistoryState

RevertStatus = Literal["reverted", "empty", "not_in_history", "uncommitted_changes"]


@dataclass(frozen=True, slots=True)
class RevertResult:
    """Outcome of ``revert_commit``.

    ``ok`` is false only for rejected preconditions; an ``"empty"`` result
    means every inverse step conflicted with later edits and was skipped.
    """

    ok: bool
    status: RevertStatus
    transaction: Optional[Transaction] = None
    skipped: int = 0


def revert_commit(
    history: HistoryState,
    commit: Commit,
    doc: TextDocument,
    *,
    time: Optional[datetime] = None,
    options: Optional[TrackChangesOptions] = None,
) -> RevertResult:
    """Build a transaction on ``doc`` that undoes ``commit`` as far as possible.

    A transaction that changed the document carries the revert message under
    ``options.field_name``, so the history field records it as a new commit.
    """

    index = history.index_of(commit)
    if index is None:
        telemetry.record_event(
            "revert.rejected", level="warning", data={"reason": "not_in_history"}
        )
        return RevertResult(ok=False, status="not_in_history")
    if history.has_pending:
        telemetry.record_event(
            "revert.rejected",
            level="warning",
            data={
                "reason": "uncommitted_changes",
                "pending": len(history.pending_steps),
            },
        )
        return RevertResult(ok=False, status="uncommitted_changes")

    # Maps from the document as it stood before ``commit`` to the current one.
    remap = Mapping.concat(*(entry.mapping for entry in history.commits[index:]))
    tr = Transaction(doc, time=time)
    skipped = 0

    for step_index in range(len(commit.steps) - 1, -1, -1):
        remapped = commit.steps[step_index].map(remap.slice(step_index + 1))
        if remapped is None:
            skipped += 1
            telemetry.record_event(
                "revert.skip",
                level="debug",
                data={"step": step_index, "reason": "deleted"},
            )
            continue
        result = tr.maybe_step(remapped)
        if result.doc is None:
            skipped += 1
            telemetry.record_event(
                "revert.skip",
                level="debug",
                data={"step": step_index, "reason": result.failed},
            )
            continue
        remap.append_map(remapped.get_map(), mirrors=step_index)

    if not tr.doc_changed:
        return RevertResult(ok=True, status="empty", transaction=tr, skipped=skipped)

    options = options or TrackChangesOptions()
    tr.set_meta(options.field_name, options.revert_label(commit.message))
    telemetry.record_event(
        "revert.built",
        data={"commit": index, "steps": len(tr.steps), "skipped": skipped},
    )
    return RevertResult(ok=True, status="reverted", transaction=tr, skipped=skipped)


__all__ = ["RevertResult", "RevertStatus", "revert_commit"]
