"""Track-changes options and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "BLAME_ENGINE_"


@dataclass(frozen=True, slots=True)
class TrackChangesOptions:
    """Names and labels shared by the history and highlight fields."""

    field_name: str = "trackChanges"
    highlight_field_name: str = "commitHighlight"
    highlight_class: str = "commit-blame-marker"
    revert_message: str = "Revert '{message}'"

    def __post_init__(self) -> None:
        if not self.field_name or not self.highlight_field_name:
            raise ValueError("field names cannot be empty")
        if self.field_name == self.highlight_field_name:
            raise ValueError("history and highlight fields need distinct names")
        if "{message}" not in self.revert_message:
            raise ValueError("revert_message must contain a '{message}' placeholder")
        try:
            self.revert_message.format(message="")
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"revert_message {self.revert_message!r} is not a valid template"
            ) from exc

    @classmethod
    def from_env(cls) -> "TrackChangesOptions":
        defaults = cls()
        return cls(
            highlight_class=os.getenv(
                f"{ENV_PREFIX}HIGHLIGHT_CLASS", defaults.highlight_class
            ),
            revert_message=os.getenv(
                f"{ENV_PREFIX}REVERT_MESSAGE", defaults.revert_message
            ),
        )

    def revert_label(self, message: str) -> str:
        return self.revert_message.format(message=message)


__all__ = ["TrackChangesOptions"]
