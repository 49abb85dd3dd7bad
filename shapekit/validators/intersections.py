from typing import List, Sequence, Tuple
from shapely.geometry import LinearRing, LineString

from ..geometry.errors import MalformedFlattenedStream, PathStateError
from ..geometry.flatten import flattened
from ..geometry.segments import Point, SegmentKind


def subpath_polylines(shape, flatness: float) -> List[List[Point]]:
    """Flatten ``shape`` and return one polyline per sub-path.

    Every MOVE opens a new polyline, CLOSE appends the move point so a
    closed sub-path ends where it started.
    """
    polylines: List[List[Point]] = []
    for seg in flattened(shape, flatness):
        kind = seg.kind
        if kind is SegmentKind.MOVE_TO:
            polylines.append([seg.end_point])
        elif kind in (SegmentKind.LINE_TO, SegmentKind.CLOSE):
            if not polylines:
                raise PathStateError(f"missing initial moveto before {kind}")
            current = polylines[-1]
            current.append(seg.end_point if kind is SegmentKind.LINE_TO else current[0])
        else:
            raise MalformedFlattenedStream(kind)
    return polylines

def has_self_intersections(coords: Sequence[Tuple[float, float]]) -> bool:
    if len(coords) < 2:
        return False
    if tuple(coords[0]) == tuple(coords[-1]):
        # closed ring; fewer than 3 distinct vertices encloses nothing
        if len(set(map(tuple, coords))) < 3:
            return False
        return not LinearRing(coords).is_valid
    return not LineString(coords).is_simple
