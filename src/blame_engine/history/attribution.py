"""Attribution map: which commit inserted each live range of the document.

The map is a sorted, gapless, maximally coalesced tuple of ``Span`` values
covering ``[0, len(doc))``. ``commit`` is the index of the commit that
inserted the range, or ``None`` for text that predates tracked history.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from blame_engine.transform import LEFT, RIGHT, Transform


class AttributionError(ValueError):
    """Raised by ``check_attribution_map`` when an invariant is broken."""


@dataclass(frozen=True, slots=True)
class Span:
    start: int
    end: int
    commit: Optional[int] = None

    @property
    def size(self) -> int:
        return self.end - self.start


AttributionMap = Tuple[Span, ...]


def initial_attribution(size: int) -> AttributionMap:
    return (Span(0, size),) if size > 0 else ()


def update_attribution_map(
    spans: Sequence[Span], transform: Transform, commit_id: int
) -> AttributionMap:
    """Carry ``spans`` across ``transform`` and attribute new text to ``commit_id``."""

    mapping = transform.mapping
    result: List[Span] = []
    for span in spans:
        start = mapping.map(span.start, RIGHT)
        end = mapping.map(span.end, LEFT)
        if start >= end:
            continue
        previous = result[-1] if result else None
        if previous and previous.commit == span.commit and previous.end == start:
            result[-1] = Span(previous.start, end, span.commit)
        else:
            result.append(Span(start, end, span.commit))

    for index, step_map in enumerate(mapping):
        after = mapping.slice(index + 1)
        for _old_start, _old_end, new_start, new_end in step_map.changed_ranges():
            insert_span(
                result, after.map(new_start, RIGHT), after.map(new_end, LEFT), commit_id
            )

    return tuple(result)


def insert_span(
    spans: List[Span], start: int, end: int, commit: Optional[int]
) -> None:
    """Upsert ``[start, end)`` for ``commit`` into ``spans`` in place."""

    if start >= end:
        return

    pos = 0
    while pos < len(spans):
        span = spans[pos]
        if span.commit == commit:
            if span.end >= start:
                break
        elif span.end > start:
            if span.start < start:
                # Left remainder keeps its attribution; the right side is
                # handled by the consuming loop below.
                left = Span(span.start, start, span.commit)
                if span.end > end:
                    spans.insert(pos, left)
                else:
                    spans[pos] = left
                pos += 1
            break
        pos += 1

    while pos < len(spans):
        span = spans[pos]
        if span.commit == commit:
            if span.start > end:
                break
            start = min(start, span.start)
            end = max(end, span.end)
            del spans[pos]
        else:
            if span.start >= end:
                break
            if span.end > end:
                spans[pos] = Span(end, span.end, span.commit)
                break
            del spans[pos]

    spans.insert(pos, Span(start, end, commit))


def attribution_at(spans: Sequence[Span], pos: int) -> Optional[Span]:
    """Span containing ``pos``, or ``None`` past the end of the document."""

    index = bisect_right([span.start for span in spans], pos) - 1
    if index < 0:
        return None
    span = spans[index]
    return span if span.start <= pos < span.end else None


def spans_for(spans: Iterable[Span], commit: Optional[int]) -> AttributionMap:
    return tuple(span for span in spans if span.commit == commit)


def check_attribution_map(spans: Sequence[Span], size: int) -> None:
    cursor = 0
    previous: Optional[Span] = None
    for span in spans:
        if span.start >= span.end:
            raise AttributionError(f"Empty span {span}")
        if span.start != cursor:
            raise AttributionError(f"Span {span} does not start at {cursor}")
        if previous is not None and previous.commit == span.commit:
            raise AttributionError(f"Adjacent spans {previous} and {span} not merged")
        cursor = span.end
        previous = span
    if cursor != size:
        raise AttributionError(f"Spans cover [0, {cursor}) instead of [0, {size})")


__all__ = [
    "AttributionError",
    "AttributionMap",
    "Span",
    "initial_attribution",
    "update_attribution_map",
    "insert_span",
    "attribution_at",
    "spans_for",
    "check_attribution_map",
]
