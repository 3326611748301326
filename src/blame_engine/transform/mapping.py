"""Position mapping fragments and sliceable mapping pipelines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Mapping as MappingType, Optional, Tuple

# Range triple: (start, old_size, new_size) in pre-edit coordinates.
Range = Tuple[int, int, int]
RecoverToken = Tuple[int, int]  # (range index, offset inside the range)

DEL_BEFORE = 1
DEL_AFTER = 2
DEL_ACROSS = 4
DEL_SIDE = 8

LEFT = -1
RIGHT = 1


@dataclass(frozen=True, slots=True)
class MapResult:
    """Mapped position plus information about deletions it crossed."""

    pos: int
    del_info: int = 0
    recover: Optional[RecoverToken] = None

    @property
    def deleted(self) -> bool:
        """The content on the side of ``bias`` was deleted."""

        return bool(self.del_info & DEL_SIDE)

    @property
    def deleted_before(self) -> bool:
        return bool(self.del_info & (DEL_BEFORE | DEL_ACROSS))

    @property
    def deleted_after(self) -> bool:
        return bool(self.del_info & (DEL_AFTER | DEL_ACROSS))

    @property
    def deleted_across(self) -> bool:
        return bool(self.del_info & DEL_ACROSS)


@dataclass(frozen=True, slots=True)
class StepMap:
    """Mapping fragment produced by a single step."""

    ranges: Tuple[Range, ...] = ()
    inverted: bool = False

    def _sizes(self, entry: Range) -> Tuple[int, int]:
        _, size_a, size_b = entry
        return (size_b, size_a) if self.inverted else (size_a, size_b)

    def map_result(self, pos: int, bias: int = RIGHT) -> MapResult:
        diff = 0
        for index, entry in enumerate(self.ranges):
            start = entry[0] - (diff if self.inverted else 0)
            if start > pos:
                break
            old_size, new_size = self._sizes(entry)
            end = start + old_size
            if pos <= end:
                if not old_size:
                    side = bias
                elif pos == start:
                    side = LEFT
                elif pos == end:
                    side = RIGHT
                else:
                    side = bias
                mapped = start + diff + (0 if side < 0 else new_size)
                anchor = start if bias < 0 else end
                recover = None if pos == anchor else (index, pos - start)
                if pos == start:
                    del_info = DEL_AFTER
                elif pos == end:
                    del_info = DEL_BEFORE
                else:
                    del_info = DEL_ACROSS
                if pos != anchor:
                    del_info |= DEL_SIDE
                return MapResult(mapped, del_info, recover)
            diff += new_size - old_size
        return MapResult(pos + diff)

    def map(self, pos: int, bias: int = RIGHT) -> int:
        return self.map_result(pos, bias).pos

    def recover(self, token: RecoverToken) -> int:
        """Position inside a range that a mirrored map deleted."""

        index, offset = token
        diff = 0
        if not self.inverted:
            for entry in self.ranges[:index]:
                old_size, new_size = self._sizes(entry)
                diff += new_size - old_size
        return self.ranges[index][0] + diff + offset

    def changed_ranges(self) -> Iterator[Tuple[int, int, int, int]]:
        """Yield ``(old_start, old_end, new_start, new_end)`` per range."""

        diff = 0
        for entry in self.ranges:
            start = entry[0]
            old_size, new_size = self._sizes(entry)
            old_start = start - (diff if self.inverted else 0)
            new_start = start + (0 if self.inverted else diff)
            yield old_start, old_start + old_size, new_start, new_start + new_size
            diff += new_size - old_size

    def invert(self) -> "StepMap":
        return StepMap(self.ranges, not self.inverted)

    def to_json(self) -> dict:
        return {
            "ranges": [list(entry) for entry in self.ranges],
            "inverted": self.inverted,
        }

    @classmethod
    def from_json(cls, data: MappingType[str, object]) -> "StepMap":
        raw = data.get("ranges") or ()
        ranges = tuple(
            (int(entry[0]), int(entry[1]), int(entry[2]))  # type: ignore[index]
            for entry in raw  # type: ignore[union-attr]
        )
        return cls(ranges, bool(data.get("inverted", False)))


class Mapping:
    """Ordered pipeline of step maps with a ``[start, end)`` window.

    Mirror pairs mark a map as the inverse of an earlier one; mapping through
    both recovers positions inside content that was deleted and restored
    instead of collapsing them onto the deletion point.
    """

    def __init__(
        self,
        maps: Iterable[StepMap] = (),
        mirror: Iterable[Tuple[int, int]] = (),
        start: int = 0,
        end: Optional[int] = None,
    ) -> None:
        self.maps: List[StepMap] = list(maps)
        self.mirror: List[Tuple[int, int]] = list(mirror)
        self.start = start
        self.end = len(self.maps) if end is None else end

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[StepMap]:
        return iter(self.maps[self.start : self.end])

    def slice(self, start: int = 0, end: Optional[int] = None) -> "Mapping":
        """Restrict the pipeline to maps ``[start, end)`` of this window."""

        stop = self.end if end is None else self.start + end
        return Mapping(self.maps, self.mirror, self.start + start, stop)

    def append_map(self, step_map: StepMap, mirrors: Optional[int] = None) -> None:
        """Append ``step_map``; ``mirrors`` names the slot it inverts."""

        self.maps.append(step_map)
        self.end = len(self.maps)
        if mirrors is not None:
            self.set_mirror(len(self.maps) - 1, mirrors)

    def append_mapping(self, other: "Mapping") -> None:
        offset = len(self.maps)
        for index in range(other.start, other.end):
            partner = other.get_mirror(index)
            mirrors = None
            if partner is not None and partner < index and partner >= other.start:
                mirrors = offset + partner - other.start
            self.append_map(other.maps[index], mirrors)

    @classmethod
    def concat(cls, *mappings: "Mapping") -> "Mapping":
        result = cls()
        for mapping in mappings:
            result.append_mapping(mapping)
        return result

    def set_mirror(self, index: int, partner: int) -> None:
        self.mirror.append((index, partner))

    def get_mirror(self, index: int) -> Optional[int]:
        for left, right in self.mirror:
            if left == index:
                return right
            if right == index:
                return left
        return None

    def map_result(self, pos: int, bias: int = RIGHT) -> MapResult:
        del_info = 0
        index = self.start
        while index < self.end:
            result = self.maps[index].map_result(pos, bias)
            if result.recover is not None:
                partner = self.get_mirror(index)
                if partner is not None and index < partner < self.end:
                    pos = self.maps[partner].recover(result.recover)
                    index = partner + 1
                    continue
            del_info |= result.del_info
            pos = result.pos
            index += 1
        return MapResult(pos, del_info)

    def map(self, pos: int, bias: int = RIGHT) -> int:
        return self.map_result(pos, bias).pos

    def __repr__(self) -> str:
        return f"Mapping(maps={len(self.maps)}, window=({self.start}, {self.end}))"


__all__ = [
    "LEFT",
    "RIGHT",
    "MapResult",
    "StepMap",
    "Mapping",
]
