"""History state: attribution map, commits and the uncommitted buffer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple

from blame_engine.buffer import TextDocument
from blame_engine.transform import Step, StepMap, Transform

from .attribution import (
    AttributionMap,
    Span,
    attribution_at,
    initial_attribution,
    update_attribution_map,
)
from .commit import Commit


@dataclass(frozen=True, slots=True)
class HistoryState:
    """Immutable snapshot; every transition returns a new instance.

    Spans created before the next commit carry ``pending_commit_id``, the
    index that commit will occupy in ``commits`` once ``apply_commit`` runs.
    """

    attribution: AttributionMap = ()
    commits: Tuple[Commit, ...] = ()
    pending_steps: Tuple[Step, ...] = ()
    pending_maps: Tuple[StepMap, ...] = ()

    @classmethod
    def init(cls, doc: TextDocument) -> "HistoryState":
        return cls(attribution=initial_attribution(doc.size))

    @property
    def pending_commit_id(self) -> int:
        return len(self.commits)

    @property
    def has_pending(self) -> bool:
        return bool(self.pending_steps)

    def index_of(self, commit: Commit) -> Optional[int]:
        for index, candidate in enumerate(self.commits):
            if candidate is commit:
                return index
        return None

    def attribution_at(self, pos: int) -> Optional[Span]:
        return attribution_at(self.attribution, pos)

    def apply_transform(self, transform: Transform) -> "HistoryState":
        if not transform.doc_changed:
            return self
        inverted = tuple(
            step.invert(transform.docs[index])
            for index, step in enumerate(transform.steps)
        )
        attribution = update_attribution_map(
            self.attribution, transform, self.pending_commit_id
        )
        return replace(
            self,
            attribution=attribution,
            pending_steps=self.pending_steps + inverted,
            pending_maps=self.pending_maps + tuple(transform.mapping),
        )

    def apply_commit(self, message: str, time: datetime) -> "HistoryState":
        if not self.pending_steps:
            return self
        commit = Commit(
            message=message,
            time=time,
            steps=self.pending_steps,
            maps=self.pending_maps,
        )
        return replace(
            self,
            commits=self.commits + (commit,),
            pending_steps=(),
            pending_maps=(),
        )


__all__ = ["HistoryState"]
