"""Change attribution, commit history and selective revert."""

from .attribution import (
    AttributionError,
    AttributionMap,
    Span,
    attribution_at,
    check_attribution_map,
    initial_attribution,
    insert_span,
    spans_for,
    update_attribution_map,
)
from .commit import Commit
from .revert import RevertResult, RevertStatus, revert_commit
from .state import HistoryState

__all__ = [
    "AttributionError",
    "AttributionMap",
    "Span",
    "attribution_at",
    "check_attribution_map",
    "initial_attribution",
    "insert_span",
    "spans_for",
    "update_attribution_map",
    "Commit",
    "HistoryState",
    "RevertResult",
    "RevertStatus",
    "revert_commit",
]
