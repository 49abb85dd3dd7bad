from typing import List
from .dsl_parser import Shape
from ..geometry.extract import extract_points
from ..geometry.segments import SegmentKind
import svgwrite

_SVG_CMD = {
    SegmentKind.MOVE_TO: "M",
    SegmentKind.LINE_TO: "L",
    SegmentKind.QUAD_TO: "Q",
    SegmentKind.CUBIC_TO: "C",
}

def path_data(shape: Shape) -> str:
    """SVG ``d`` attribute for the shape's path."""
    path_cmds = []
    for seg in shape.path:
        if seg.kind is SegmentKind.CLOSE:
            path_cmds.append("Z")
            continue
        pts = " ".join(f"{x},{y}" for x, y in seg.points)
        path_cmds.append(f"{_SVG_CMD[seg.kind]} {pts}")
    return " ".join(path_cmds)

def shapes_to_svg(shapes: List[Shape], filename: str, page_size=(800, 600), margin=20,
                  flatness: float | None = None, spacing=200):
    """Write a preview SVG, stacking shapes vertically.

    When ``flatness`` is given the flattened points are drawn as dots.
    """
    dwg = svgwrite.Drawing(filename, size=(page_size[0], page_size[1]))
    x_off, y_off = margin, margin
    for shape in shapes:
        g = dwg.g(transform=f"translate({x_off},{y_off})")
        g.add(dwg.path(d=path_data(shape), fill="none", stroke="black", stroke_width=1))
        if flatness is not None:
            for x, y in extract_points(shape, flatness):
                g.add(dwg.circle(center=(x, y), r=1.5, fill="red"))
        g.add(dwg.text(shape.name, insert=(0, -5), font_size="12px"))
        dwg.add(g)
        y_off += spacing
    dwg.save()
