"""
Segment records shared by every path operation.

A path is an ordered stream of ``Segment`` values:

  MOVE_TO   x,y
  LINE_TO   x,y
  QUAD_TO   cx,cy x,y
  CUBIC_TO  c1x,c1y c2x,c2y x,y
  CLOSE
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Point = Tuple[float, float]


class SegmentKind(Enum):
    MOVE_TO = "MOVE"
    LINE_TO = "LINE"
    QUAD_TO = "QUAD"
    CUBIC_TO = "CURVE"
    CLOSE = "CLOSE"

    def __str__(self):
        return self.name


# number of coordinate scalars carried by each kind
COORD_COUNT = {
    SegmentKind.MOVE_TO: 2,
    SegmentKind.LINE_TO: 2,
    SegmentKind.QUAD_TO: 4,
    SegmentKind.CUBIC_TO: 6,
    SegmentKind.CLOSE: 0,
}


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    coords: Tuple[float, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "coords", tuple(float(c) for c in self.coords))
        expected = COORD_COUNT.get(self.kind)
        if expected is not None and len(self.coords) != expected:
            raise ValueError(f"{self.kind} takes {expected} coordinates, got {len(self.coords)}")

    @property
    def points(self) -> Tuple[Point, ...]:
        c = self.coords
        return tuple((c[i], c[i + 1]) for i in range(0, len(c), 2))

    @property
    def end_point(self) -> Point | None:
        """Last point of the segment, ``None`` for CLOSE."""
        pts = self.points
        return pts[-1] if pts else None

    @classmethod
    def move_to(cls, x: float, y: float) -> "Segment":
        return cls(SegmentKind.MOVE_TO, (x, y))

    @classmethod
    def line_to(cls, x: float, y: float) -> "Segment":
        return cls(SegmentKind.LINE_TO, (x, y))

    @classmethod
    def quad_to(cls, cx: float, cy: float, x: float, y: float) -> "Segment":
        return cls(SegmentKind.QUAD_TO, (cx, cy, x, y))

    @classmethod
    def cubic_to(cls, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> "Segment":
        return cls(SegmentKind.CUBIC_TO, (c1x, c1y, c2x, c2y, x, y))

    @classmethod
    def close(cls) -> "Segment":
        return cls(SegmentKind.CLOSE)


@dataclass(frozen=True)
class LineSegment:
    start: Point
    end: Point
