import pytest

from shapekit.dsl.dsl_parser import DslError, Shape, format_dsl, parse_dsl
from shapekit.geometry.path import Path
from shapekit.geometry.segments import Segment, SegmentKind

SAMPLE = """
# a blob and a square
SHAPE blob
MOVE 0,0
QUAD 5,10 -> 10,0
CURVE 10,-5 -> 5,-5 -> 0.5,-2.25
CLOSE
END

SHAPE square
MOVE 0,0
LINE 10,0
LINE 10,10
CLOSE
END
"""


def test_parse_sample():
    blob, square = parse_dsl(SAMPLE)
    assert blob.name == "blob"
    assert list(blob.path) == [
        Segment.move_to(0, 0),
        Segment.quad_to(5, 10, 10, 0),
        Segment.cubic_to(10, -5, 5, -5, 0.5, -2.25),
        Segment.close(),
    ]
    assert [s.kind for s in square.path] == [
        SegmentKind.MOVE_TO, SegmentKind.LINE_TO, SegmentKind.LINE_TO, SegmentKind.CLOSE,
    ]


def test_format_is_inverse_of_parse():
    shapes = parse_dsl(SAMPLE)
    text = format_dsl(shapes)
    assert "QUAD 5,10 -> 10,0" in text
    assert "CURVE 10,-5 -> 5,-5 -> 0.5,-2.25" in text
    again = parse_dsl(text)
    assert [s.name for s in again] == ["blob", "square"]
    assert [s.path for s in again] == [s.path for s in shapes]


def test_format_empty_shape():
    assert format_dsl([Shape("nothing", Path())]) == "SHAPE nothing\nEND\n"


@pytest.mark.parametrize("text, lineno", [
    ("MOVE 0,0", 1),
    ("SHAPE a\nMOVE 0,0\nARC 1,1", 3),
    ("SHAPE a\nMOVE 0\nEND", 2),
    ("SHAPE a\nMOVE 0,0\nQUAD 1,1\nEND", 3),
    ("SHAPE a\nLINE 1,1\nEND", 2),
])
def test_errors_carry_line_number(text, lineno):
    with pytest.raises(DslError) as exc:
        parse_dsl(text)
    assert exc.value.lineno == lineno
    assert str(exc.value).startswith(f"line {lineno}:")
