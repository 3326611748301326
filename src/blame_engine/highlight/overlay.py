"""Decorations marking the ranges a chosen commit is responsible for."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from blame_engine.history import Commit, HistoryState, spans_for
from blame_engine.transform import LEFT, RIGHT, Mapping, Transform

DEFAULT_STYLE = "commit-blame-marker"


@dataclass(frozen=True, slots=True)
class Decoration:
    start: int
    end: int
    style: str = DEFAULT_STYLE

    def map(self, mapping: Mapping) -> Optional["Decoration"]:
        start = mapping.map(self.start, RIGHT)
        end = mapping.map(self.end, LEFT)
        if start >= end:
            return None
        return Decoration(start, end, self.style)


class DecorationSet:
    """Sorted, immutable collection of inline decorations."""

    __slots__ = ("_items",)

    def __init__(self, decorations: Iterable[Decoration] = ()) -> None:
        self._items: Tuple[Decoration, ...] = tuple(
            sorted(decorations, key=lambda deco: (deco.start, deco.end))
        )

    def __iter__(self) -> Iterator[Decoration]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecorationSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"DecorationSet({list(self._items)!r})"

    def find(
        self, start: Optional[int] = None, end: Optional[int] = None
    ) -> Tuple[Decoration, ...]:
        """Decorations touching ``[start, end]``; no bounds returns all."""

        low = 0 if start is None else start
        return tuple(
            deco
            for deco in self._items
            if deco.end >= low and (end is None or deco.start <= end)
        )

    def map(self, mapping: Mapping) -> "DecorationSet":
        mapped = (deco.map(mapping) for deco in self._items)
        return DecorationSet(deco for deco in mapped if deco is not None)


EMPTY = DecorationSet()


@dataclass(frozen=True, slots=True)
class HighlightRequest:
    """Meta payload asking the overlay to show or hide a commit."""

    add: Optional[Commit] = None
    clear: Optional[Commit] = None


@dataclass(frozen=True, slots=True)
class HighlightState:
    decorations: DecorationSet = EMPTY
    active: Optional[Commit] = None

    @property
    def is_idle(self) -> bool:
        return self.active is None


def highlight_commit(
    history: HistoryState, commit: Commit, *, style: str = DEFAULT_STYLE
) -> HighlightState:
    index = history.index_of(commit)
    decorations = ()
    if index is not None:
        decorations = tuple(
            Decoration(span.start, span.end, style)
            for span in spans_for(history.attribution, index)
        )
    return HighlightState(DecorationSet(decorations), commit)


def apply_highlight(
    state: HighlightState,
    request: Optional[HighlightRequest],
    transform: Transform,
    history: HistoryState,
    *,
    style: str = DEFAULT_STYLE,
) -> HighlightState:
    """Advance the overlay across one transaction.

    ``history`` must already reflect ``transform`` so fresh decorations line
    up with the transformed document.
    """

    if request is not None:
        if request.add is not None and request.add is not state.active:
            return highlight_commit(history, request.add, style=style)
        if request.clear is not None and request.clear is state.active:
            return HighlightState()
    if transform.doc_changed and state.active is not None:
        return HighlightState(state.decorations.map(transform.mapping), state.active)
    return state


__all__ = [
    "DEFAULT_STYLE",
    "Decoration",
    "DecorationSet",
    "HighlightRequest",
    "HighlightState",
    "apply_highlight",
    "highlight_commit",
]
