"""Immutable commit records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping as MappingType, Tuple

from blame_engine.transform import Mapping, Step, StepMap


@dataclass(frozen=True, eq=False, slots=True)
class Commit:
    """Named, timestamped bundle of inverted steps.

    ``steps[i]`` undoes original step ``i`` and ``maps[i]`` is the map that
    step produced; both are kept in the order the edits were applied.
    Commits compare by identity so a history lookup never matches a commit
    from another session that happens to carry the same data.
    """

    message: str
    time: datetime
    steps: Tuple[Step, ...]
    maps: Tuple[StepMap, ...]

    def __post_init__(self) -> None:
        if len(self.steps) != len(self.maps):
            raise ValueError("Commit needs exactly one map per step")

    @property
    def mapping(self) -> Mapping:
        return Mapping(self.maps)

    def to_json(self) -> dict:
        return {
            "message": self.message,
            "time": self.time.isoformat(),
            "steps": [step.to_json() for step in self.steps],
            "maps": [step_map.to_json() for step_map in self.maps],
        }

    @classmethod
    def from_json(cls, data: MappingType[str, Any]) -> "Commit":
        return cls(
            message=str(data["message"]),
            time=datetime.fromisoformat(str(data["time"])),
            steps=tuple(Step.from_json(step) for step in data.get("steps", ())),
            maps=tuple(StepMap.from_json(entry) for entry in data.get("maps", ())),
        )

    def __repr__(self) -> str:
        return f"Commit({self.message!r}, steps={len(self.steps)})"


__all__ = ["Commit"]
