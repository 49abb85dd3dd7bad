from __future__ import annotations
from typing import Any, Optional


class PathError(ValueError):
    """Base class for invalid path input."""


class PathStateError(PathError):
    pass


class MalformedFlattenedStream(PathError):
    """A curve or unknown segment kind showed up in a flattened stream."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"{kind} in flattened path")


class StructuralMismatch(PathError):
    """The two paths given to ``interpolate`` are not structurally equal."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"{message} (segment {index})"
        super().__init__(message)
