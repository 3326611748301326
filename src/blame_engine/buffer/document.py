"""Immutable text document used by steps and transforms."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Plain-text document snapshot.

    Every edit produces a new instance with a bumped ``version``; old
    snapshots stay valid so steps can be inverted against the exact document
    they were applied to.
    """

    text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text=text, version=0)

    @property
    def size(self) -> int:
        return len(self.text)

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def replace(self, start: int, end: int, text: str) -> "TextDocument":
        """Return a document with ``[start:end]`` replaced by ``text``."""

        updated = self.text[:start] + text + self.text[end:]
        return TextDocument(text=updated, version=self.version + 1)

    def __len__(self) -> int:
        return len(self.text)
