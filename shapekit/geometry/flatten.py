from __future__ import annotations
from typing import Iterable, Iterator, List, Tuple
import math

from .errors import PathError, PathStateError
from .segments import Point, Segment, SegmentKind

# max subdivision depth per curve, 2**10 pieces at most
LIMIT = 10


def _deviation(p, a, b):
    """Distance from control point p to the chord a-b."""
    ax, ay = a
    cx, cy = b[0] - ax, b[1] - ay
    px, py = p[0] - ax, p[1] - ay
    chord2 = cx*cx + cy*cy
    # project onto the chord, clamped to its ends
    t = 0.0 if chord2 == 0 else min(1.0, max(0.0, (px*cx + py*cy) / chord2))
    return math.hypot(px - t*cx, py - t*cy)

def _mid(a, b):
    return ((a[0]+b[0])/2, (a[1]+b[1])/2)

def flatten_quad(p0, p1, p2, tol=0.2, limit=LIMIT) -> List[Point]:
    """Adaptive subdivision of a quadratic Bezier, excluding the start point."""
    out: List[Point] = []
    stack = [(p0, p1, p2, 0)]
    while stack:
        a,b,c,depth = stack.pop()
        if depth >= limit or _deviation(b,a,c) <= tol:
            out.append(c)
        else:
            ab = _mid(a,b); bc = _mid(b,c)
            abc = _mid(ab,bc)
            stack.append((abc,bc,c,depth+1))
            stack.append((a,ab,abc,depth+1))
    return out

def flatten_cubic(p0, p1, p2, p3, tol=0.2, limit=LIMIT) -> List[Point]:
    """Adaptive subdivision of a cubic Bezier, excluding the start point."""
    out: List[Point] = []
    stack = [(p0, p1, p2, p3, 0)]
    while stack:
        a,b,c,d,depth = stack.pop()
        chord_err = max(_deviation(b,a,d), _deviation(c,a,d))
        if depth >= limit or chord_err <= tol:
            out.append(d)
        else:
            # de Casteljau subdivision
            ab = _mid(a,b); bc = _mid(b,c); cd = _mid(c,d)
            abc = _mid(ab,bc); bcd = _mid(bc,cd)
            abcd = _mid(abc,bcd)
            stack.append((abcd,bcd,cd,d,depth+1))
            stack.append((a,ab,abc,abcd,depth+1))
    return out

def check_flatness(flatness: float) -> float:
    try:
        flatness = float(flatness)
    except (TypeError, ValueError):
        raise PathError(f"flatness must be a number, got {flatness!r}") from None
    if not math.isfinite(flatness) or flatness < 0:
        raise PathError(f"flatness must be finite and >= 0, got {flatness}")
    return flatness

def flatten_segments(segments: Iterable[Segment], flatness: float) -> Iterator[Segment]:
    """Replace QUAD_TO/CUBIC_TO segments by LINE_TO runs within ``flatness``.

    Other segments, including unknown kinds, are passed through untouched.
    """
    return _flatten(segments, check_flatness(flatness))

def _flatten(segments, flatness):
    pen: Tuple[float, float] | None = None
    last_move = None
    for seg in segments:
        kind = seg.kind
        if kind is SegmentKind.MOVE_TO:
            pen = last_move = seg.end_point
        elif kind is SegmentKind.CLOSE:
            pen = last_move
        elif kind in (SegmentKind.QUAD_TO, SegmentKind.CUBIC_TO):
            if pen is None:
                raise PathStateError("missing initial moveto")
            if kind is SegmentKind.QUAD_TO:
                pts = flatten_quad(pen, *seg.points, tol=flatness)
            else:
                pts = flatten_cubic(pen, *seg.points, tol=flatness)
            for x, y in pts:
                yield Segment.line_to(x, y)
            pen = seg.end_point
            continue
        elif kind is SegmentKind.LINE_TO:
            pen = seg.end_point
        yield seg

def flattened(shape, flatness: float) -> Iterator[Segment]:
    """Flattened segment stream of a path source or a plain segment iterable."""
    if hasattr(shape, "segments"):
        return iter(shape.segments(flatness))
    return flatten_segments(shape, flatness)
