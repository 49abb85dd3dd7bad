"""
Very small path DSL -> named shapes.

SHAPE <name>
MOVE x,y
LINE x,y
QUAD cx,cy -> x,y
CURVE x1,y1 -> x2,y2 -> x3,y3
CLOSE
END
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from ..geometry.errors import PathError
from ..geometry.path import Path
from ..geometry.segments import Segment, SegmentKind


class DslError(ValueError):
    def __init__(self, lineno: int, message: str):
        self.lineno = lineno
        super().__init__(f"line {lineno}: {message}")


@dataclass
class Shape:
    name: str
    path: Path = field(default_factory=Path)

    def segments(self, flatness=None):
        return self.path.segments(flatness)


def _point(text: str) -> Tuple[float, float]:
    x, y = map(float, text.strip().split(","))
    return x, y

def _points(body: str, count: int) -> List[float]:
    parts = [seg.strip() for seg in body.split("->")]
    if len(parts) != count:
        raise ValueError(f"expected {count} points, got {len(parts)}")
    coords: List[float] = []
    for part in parts:
        coords.extend(_point(part))
    return coords

_COMMANDS = {
    "MOVE": (SegmentKind.MOVE_TO, 1),
    "LINE": (SegmentKind.LINE_TO, 1),
    "QUAD": (SegmentKind.QUAD_TO, 2),
    "CURVE": (SegmentKind.CUBIC_TO, 3),
}

def parse_dsl(text: str) -> List[Shape]:
    shapes: List[Shape] = []
    current: Shape | None = None
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("SHAPE "):
            name = line.split(" ", 1)[1].strip()
            current = Shape(name=name)
            shapes.append(current)
            continue
        if line == "END":
            current = None
            continue
        if current is None:
            raise DslError(lineno, "command outside of SHAPE/END block")
        head, _, body = line.partition(" ")
        try:
            if head == "CLOSE":
                current.path.close()
            elif head in _COMMANDS:
                kind, count = _COMMANDS[head]
                current.path.append(Segment(kind, _points(body, count)))
            else:
                raise DslError(lineno, f"unknown line: {line}")
        except DslError:
            raise
        except PathError as e:
            raise DslError(lineno, str(e)) from e
        except ValueError as e:
            raise DslError(lineno, f"bad coordinates in {line!r}: {e}") from e
    return shapes

def _fmt(v: float) -> str:
    return str(int(v)) if v.is_integer() else repr(v)

def format_dsl(shapes: List[Shape]) -> str:
    """Inverse of ``parse_dsl``."""
    names = {kind: name for name, (kind, _) in _COMMANDS.items()}
    lines: List[str] = []
    for shape in shapes:
        lines.append(f"SHAPE {shape.name}")
        for seg in shape.path:
            if seg.kind is SegmentKind.CLOSE:
                lines.append("CLOSE")
                continue
            pts = " -> ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in seg.points)
            lines.append(f"{names[seg.kind]} {pts}")
        lines.append("END")
    return "\n".join(lines) + "\n"
