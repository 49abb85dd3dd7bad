from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple
import logging

from .errors import PathError, StructuralMismatch
from .path import Path
from .segments import Segment, SegmentKind

logger = logging.getLogger(__name__)

_DONE = object()


def blend(c0: Sequence[float], c1: Sequence[float], alpha: float) -> Tuple[float, ...]:
    """Component-wise ``c0 + (c1 - c0) * alpha``."""
    return tuple(a + (b - a) * alpha for a, b in zip(c0, c1))


def _raw(shape) -> Iterable[Segment]:
    if hasattr(shape, "segments"):
        return shape.segments()
    return shape


def interpolate(shape0, shape1, alpha: float) -> Path:
    """Blend two structurally equal paths segment by segment.

    ``alpha`` 0 gives ``shape0``, 1 gives ``shape1``; other values
    interpolate or extrapolate. Raises ``StructuralMismatch`` when the
    paths differ in length or in the kind of any segment.
    """
    it0 = iter(_raw(shape0))
    it1 = iter(_raw(shape1))
    blended: List[Segment] = []
    index = 0
    while True:
        s0 = next(it0, _DONE)
        s1 = next(it1, _DONE)
        if s0 is _DONE and s1 is _DONE:
            break
        if s1 is _DONE:
            raise StructuralMismatch("second path is done, but not the first", index)
        if s0 is _DONE:
            raise StructuralMismatch("first path is done, but not the second", index)
        if s0.kind != s1.kind:
            raise StructuralMismatch(f"incompatible segments: {s0.kind} vs. {s1.kind}", index)
        if not isinstance(s0.kind, SegmentKind):
            raise PathError(f"unknown segment kind: {s0.kind!r}")
        blended.append(Segment(s0.kind, blend(s0.coords, s1.coords, alpha)))
        index += 1
    logger.debug("interpolated %d segments at alpha=%s", index, alpha)
    return Path.from_segments(blended)
