"""
DXF exporter (AC1018) for flattened shapes.

- Writes one DXF file per call.
- Units: sets $INSUNITS=4 (mm) when units="mm", 1 for "in", 0 otherwise.
- Geometry: every shape is flattened with ``flatness`` and each resulting
  line segment is written as a LINE entity, closing segments included.
- Layers: OUTLINE/TEXT created BYLAYER.

Requires: ezdxf
"""
from __future__ import annotations
from typing import Dict, List, Optional
import logging

import ezdxf

from ..dsl.dsl_parser import Shape
from ..geometry.extract import extract_lines

logger = logging.getLogger(__name__)

INSUNITS = {"mm": 4, "in": 1}


def export_dxf(
    shapes: List[Shape],
    out_path: str,
    units: str = "mm",
    flatness: float = 0.2,
    layer_map: Optional[Dict[str, str]] = None,
):
    doc = ezdxf.new(dxfversion="AC1018")
    msp = doc.modelspace()
    doc.header["$INSUNITS"] = INSUNITS.get(units.lower(), 0)

    # Layers
    default_layers = {
        "OUTLINE": {"color": 7},
        "TEXT": {"color": 8},
    }
    if layer_map:
        # remap names; colors remain default
        default_layers = {layer_map.get(k, k): v for k, v in default_layers.items()}
    for lname, opts in default_layers.items():
        if lname not in doc.layers:
            doc.layers.add(lname, color=opts.get("color", 7))
    layer_outline = (layer_map or {}).get("OUTLINE", "OUTLINE")
    layer_text = (layer_map or {}).get("TEXT", "TEXT")

    for shape in shapes:
        lines = extract_lines(shape, flatness)
        for line in lines:
            msp.add_line(line.start, line.end, dxfattribs={"layer": layer_outline})
        anchor = lines[0].start if lines else (0, 0)
        msp.add_text(shape.name, dxfattribs={"height": 5, "layer": layer_text}).set_placement(
            (anchor[0], anchor[1] - 10)
        )
        logger.debug("shape %s: %d LINE entities", shape.name, len(lines))

    # Save
    doc.saveas(out_path)
    return out_path
