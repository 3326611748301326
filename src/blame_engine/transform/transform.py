"""Step accumulation: transforms and timestamped transactions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from blame_engine.buffer import TextDocument

from .mapping import Mapping
from .steps import ReplaceStep, Step, StepError, StepResult


class Transform:
    """Ordered application of steps starting from ``before``.

    ``docs[i]`` is the document step ``i`` was applied to, which is what
    ``Step.invert`` needs. ``mapping`` holds one map per step.
    """

    def __init__(self, doc: TextDocument) -> None:
        self.doc = doc
        self.steps: List[Step] = []
        self.docs: List[TextDocument] = []
        self.mapping = Mapping()

    @property
    def before(self) -> TextDocument:
        return self.docs[0] if self.docs else self.doc

    @property
    def doc_changed(self) -> bool:
        return bool(self.steps)

    def step(self, step: Step) -> "Transform":
        result = self.maybe_step(step)
        if result.failed is not None:
            raise StepError(result.failed, step=step)
        return self

    def maybe_step(self, step: Step) -> StepResult:
        result = step.apply(self.doc)
        if result.doc is not None:
            self.docs.append(self.doc)
            self.steps.append(step)
            self.mapping.append_map(step.get_map())
            self.doc = result.doc
        return result

    def replace(self, start: int, end: int, text: str = "") -> "Transform":
        if start == end and not text:
            return self
        return self.step(ReplaceStep(start, end, text))

    def insert(self, pos: int, text: str) -> "Transform":
        return self.replace(pos, pos, text)

    def delete(self, start: int, end: int) -> "Transform":
        return self.replace(start, end, "")


class Transaction(Transform):
    """Transform plus a timestamp and metadata read by state fields."""

    def __init__(self, doc: TextDocument, *, time: Optional[datetime] = None) -> None:
        super().__init__(doc)
        self.time = time or datetime.now(timezone.utc)
        self._meta: Dict[str, Any] = {}

    def set_meta(self, key: str, value: Any) -> "Transaction":
        self._meta[key] = value
        return self

    def get_meta(self, key: str, default: Any = None) -> Any:
        return self._meta.get(key, default)

    @property
    def meta(self) -> Dict[str, Any]:
        return dict(self._meta)


__all__ = ["Transform", "Transaction"]
