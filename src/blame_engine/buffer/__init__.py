"""Document storage and validation."""

from .document import TextDocument
from .validation import RangeValidationError, ensure_range

__all__ = [
    "TextDocument",
    "RangeValidationError",
    "ensure_range",
]
