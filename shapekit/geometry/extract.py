"""Line segment and point extraction over flattened paths."""
from __future__ import annotations
from typing import List
import logging

from .errors import MalformedFlattenedStream, PathStateError
from .flatten import flattened
from .segments import LineSegment, Point, SegmentKind

logger = logging.getLogger(__name__)


def extract_lines(shape, flatness: float) -> List[LineSegment]:
    """Flatten ``shape`` and return the line segments that approximate it.

    A CLOSE yields a segment back to the most recent MOVE point.
    """
    result: List[LineSegment] = []
    current: Point = (0.0, 0.0)
    last_move: Point = (0.0, 0.0)
    for seg in flattened(shape, flatness):
        kind = seg.kind
        if kind is SegmentKind.MOVE_TO:
            current = last_move = seg.end_point
        elif kind is SegmentKind.LINE_TO:
            end = seg.end_point
            result.append(LineSegment(current, end))
            current = end
        elif kind is SegmentKind.CLOSE:
            result.append(LineSegment(current, last_move))
            current = last_move
        else:
            # curves never survive flattening
            raise MalformedFlattenedStream(kind)
    logger.debug("extracted %d line segments (flatness=%s)", len(result), flatness)
    return result


def extract_points(shape, flatness: float, store_on_close: bool = False) -> List[Point]:
    """Flatten ``shape`` and return its points in traversal order.

    With ``store_on_close`` every CLOSE repeats the point of the MOVE that
    opened the sub-path, so the move point shows up twice in the result.
    """
    result: List[Point] = []
    last_move: Point | None = None
    for seg in flattened(shape, flatness):
        kind = seg.kind
        if kind is SegmentKind.MOVE_TO:
            result.append(seg.end_point)
            if store_on_close:
                last_move = seg.end_point
        elif kind is SegmentKind.LINE_TO:
            result.append(seg.end_point)
        elif kind is SegmentKind.CLOSE:
            if store_on_close:
                if last_move is None:
                    raise PathStateError("missing initial moveto before CLOSE")
                result.append(last_move)
        else:
            raise MalformedFlattenedStream(kind)
    logger.debug("extracted %d points (flatness=%s, store_on_close=%s)", len(result), flatness, store_on_close)
    return result
