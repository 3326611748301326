"""Range validation shared by the editor façade."""

from __future__ import annotations

from typing import Tuple

from .document import TextDocument


class RangeValidationError(RuntimeError):
    """Raised when a caller passes positions outside the document."""

    def __init__(self, message: str, *, start: int, end: int) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


def ensure_range(document: TextDocument, start: int, end: int) -> Tuple[int, int]:
    if start < 0 or end < 0:
        raise RangeValidationError("Negative position", start=start, end=end)
    if start > end:
        raise RangeValidationError("Range start after end", start=start, end=end)
    if end > document.size:
        raise RangeValidationError("Range past end of document", start=start, end=end)
    return start, end
