"""Commit highlight overlay."""

from .overlay import (
    DEFAULT_STYLE,
    Decoration,
    DecorationSet,
    HighlightRequest,
    HighlightState,
    apply_highlight,
    highlight_commit,
)

__all__ = [
    "DEFAULT_STYLE",
    "Decoration",
    "DecorationSet",
    "HighlightRequest",
    "HighlightState",
    "apply_highlight",
    "highlight_commit",
]
