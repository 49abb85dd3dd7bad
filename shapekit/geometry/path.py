"""
Mutable path builder, also used as the segment source of every operation.

    path = Path()
    path.move_to(0, 0)
    path.quad_to(5, 10, 10, 0)
    path.close()
    list(path.segments(flatness=0.2))   # MOVE/LINE/CLOSE only
"""
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional

from .errors import PathStateError
from .flatten import flatten_segments
from .segments import Segment, SegmentKind


class Path:
    def __init__(self, segments: Optional[Iterable[Segment]] = None):
        self._segments: List[Segment] = []
        for seg in segments or ():
            self.append(seg)

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> "Path":
        return cls(segments)

    def append(self, segment: Segment) -> None:
        if not self._segments and segment.kind is not SegmentKind.MOVE_TO:
            raise PathStateError(f"missing initial moveto before {segment.kind}")
        self._segments.append(segment)

    def move_to(self, x: float, y: float) -> None:
        self.append(Segment.move_to(x, y))

    def line_to(self, x: float, y: float) -> None:
        self.append(Segment.line_to(x, y))

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self.append(Segment.quad_to(cx, cy, x, y))

    def curve_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> None:
        self.append(Segment.cubic_to(c1x, c1y, c2x, c2y, x, y))

    def close(self) -> None:
        self.append(Segment.close())

    def segments(self, flatness: Optional[float] = None) -> Iterator[Segment]:
        """Yield the segments, flattened to line runs when ``flatness`` is given."""
        if flatness is None:
            return iter(list(self._segments))
        return flatten_segments(list(self._segments), flatness)

    def __iter__(self) -> Iterator[Segment]:
        return self.segments()

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments

    def __repr__(self):
        return f"Path({self._segments!r})"
