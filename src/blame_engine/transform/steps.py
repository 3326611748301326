"""Invertible edit steps over ``TextDocument``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Mapping as MappingType, Optional, Type

from blame_engine.buffer import TextDocument

from .mapping import LEFT, RIGHT, Mapping, StepMap


class StepError(RuntimeError):
    """Raised when a step is applied strictly and the document rejects it."""

    def __init__(self, message: str, *, step: "Step") -> None:
        super().__init__(message)
        self.step = step


@dataclass(frozen=True, slots=True)
class StepResult:
    doc: Optional[TextDocument] = None
    failed: Optional[str] = None

    @classmethod
    def ok(cls, doc: TextDocument) -> "StepResult":
        return cls(doc=doc)

    @classmethod
    def fail(cls, message: str) -> "StepResult":
        return cls(failed=message)


_STEP_TYPES: Dict[str, Type["Step"]] = {}


def register_step(step_type: str) -> Callable[[Type["Step"]], Type["Step"]]:
    def decorator(cls: Type["Step"]) -> Type["Step"]:
        if step_type in _STEP_TYPES:
            raise ValueError(f"Step type '{step_type}' already registered")
        cls.step_type = step_type
        _STEP_TYPES[step_type] = cls
        return cls

    return decorator


class Step:
    """Base class for atomic document edits."""

    step_type: ClassVar[str] = ""

    def apply(self, doc: TextDocument) -> StepResult:  # pragma: no cover - abstract
        raise NotImplementedError

    def invert(self, doc: TextDocument) -> "Step":  # pragma: no cover - abstract
        """Step that undoes this one; ``doc`` is the document before it ran."""

        raise NotImplementedError

    def get_map(self) -> StepMap:  # pragma: no cover - abstract
        raise NotImplementedError

    def map(self, mapping: Mapping) -> Optional["Step"]:  # pragma: no cover
        raise NotImplementedError

    def to_json(self) -> dict:  # pragma: no cover - abstract
        raise NotImplementedError

    @classmethod
    def from_json(cls, data: MappingType[str, object]) -> "Step":
        step_type = str(data.get("stepType", ""))
        step_cls = _STEP_TYPES.get(step_type)
        if step_cls is None:
            raise ValueError(f"Unknown step type '{step_type}'")
        return step_cls._from_json(data)

    @classmethod
    def _from_json(cls, data: MappingType[str, object]) -> "Step":  # pragma: no cover
        raise NotImplementedError


@register_step("replace")
@dataclass(frozen=True, slots=True)
class ReplaceStep(Step):
    """Replace ``[start, end)`` with ``text``."""

    start: int
    end: int
    text: str = ""

    def apply(self, doc: TextDocument) -> StepResult:
        if self.start < 0 or self.start > self.end or self.end > doc.size:
            return StepResult.fail(
                f"Range ({self.start}, {self.end}) outside document of size {doc.size}"
            )
        return StepResult.ok(doc.replace(self.start, self.end, self.text))

    def invert(self, doc: TextDocument) -> "ReplaceStep":
        return ReplaceStep(
            self.start, self.start + len(self.text), doc.slice(self.start, self.end)
        )

    def get_map(self) -> StepMap:
        return StepMap(((self.start, self.end - self.start, len(self.text)),))

    def map(self, mapping: Mapping) -> Optional["ReplaceStep"]:
        start = mapping.map_result(self.start, RIGHT)
        end = mapping.map_result(self.end, LEFT)
        if start.deleted_across and end.deleted_across:
            return None
        return ReplaceStep(start.pos, max(start.pos, end.pos), self.text)

    def to_json(self) -> dict:
        return {
            "stepType": self.step_type,
            "from": self.start,
            "to": self.end,
            "text": self.text,
        }

    @classmethod
    def _from_json(cls, data: MappingType[str, object]) -> "ReplaceStep":
        start = int(data["from"])  # type: ignore[arg-type]
        end = int(data["to"])  # type: ignore[arg-type]
        return cls(start, end, str(data.get("text", "")))


__all__ = [
    "Step",
    "StepError",
    "StepResult",
    "ReplaceStep",
    "register_step",
]
