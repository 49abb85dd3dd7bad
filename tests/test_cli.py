import json

import pytest
from typer.testing import CliRunner

from shapekit.cli.main import app

runner = CliRunner()

A = """SHAPE tri
MOVE 0,0
LINE 10,0
CLOSE
END
"""
B = """SHAPE tri
MOVE 0,0
LINE 0,10
CLOSE
END
"""
ROUND = """SHAPE round
MOVE 0,0
QUAD 5,10 -> 10,0
CLOSE
END
"""


@pytest.fixture
def files(tmp_path):
    paths = {}
    for name, text in {"a": A, "b": B, "round": ROUND}.items():
        p = tmp_path / f"{name}.shape"
        p.write_text(text)
        paths[name] = p
    return paths


def test_lines(files, tmp_path):
    out = tmp_path / "out" / "lines.json"
    result = runner.invoke(app, ["lines", "--inp", str(files["a"]), "--out", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["flatness"] == 0.2
    assert data["shapes"][0]["lines"] == [[[0, 0], [10, 0]], [[10, 0], [0, 0]]]


def test_points_store_on_close(files, tmp_path):
    out = tmp_path / "points.json"
    result = runner.invoke(
        app, ["points", "--inp", str(files["a"]), "--out", str(out), "--store-on-close"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text())["shapes"][0]["points"] == [[0, 0], [10, 0], [0, 0]]


def test_points_options_file(files, tmp_path):
    opts = tmp_path / "options.yml"
    opts.write_text("flatness: 0.01\nstore_on_close: true\n")
    out = tmp_path / "points.json"
    result = runner.invoke(
        app, ["points", "--inp", str(files["round"]), "--out", str(out), "--options", str(opts)]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["flatness"] == 0.01
    assert data["store_on_close"] is True
    pts = data["shapes"][0]["points"]
    assert pts[0] == pts[-1] == [0, 0]
    assert len(pts) > 4

    # explicit flag wins over the options file
    result = runner.invoke(
        app,
        ["points", "--inp", str(files["round"]), "--out", str(out),
         "--options", str(opts), "--no-store-on-close"],
    )
    assert json.loads(out.read_text())["store_on_close"] is False


def test_interpolate(files, tmp_path):
    out = tmp_path / "mid.shape"
    result = runner.invoke(
        app,
        ["interpolate", "--first", str(files["a"]), "--second", str(files["b"]),
         "--alpha", "0.5", "--out", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert out.read_text() == "SHAPE tri\nMOVE 0,0\nLINE 5,5\nCLOSE\nEND\n"


def test_interpolate_mismatch(files, tmp_path):
    out = tmp_path / "mid.shape"
    result = runner.invoke(
        app,
        ["interpolate", "--first", str(files["a"]), "--second", str(files["round"]),
         "--out", str(out)],
    )
    assert result.exit_code == 1
    assert "incompatible segments" in result.output
    assert not out.exists()


def test_bad_dsl(files, tmp_path):
    bad = tmp_path / "bad.shape"
    bad.write_text("SHAPE x\nLINE 1,1\nEND\n")
    result = runner.invoke(app, ["lines", "--inp", str(bad), "--out", str(tmp_path / "o.json")])
    assert result.exit_code == 1
    assert "missing initial moveto" in result.output


def test_negative_flatness(files, tmp_path):
    result = runner.invoke(
        app, ["lines", "--inp", str(files["a"]), "--out", str(tmp_path / "o.json"),
              "--flatness=-1"],
    )
    assert result.exit_code == 1
    assert "flatness must be finite and >= 0" in result.output


def test_preview_and_dxf(files, tmp_path):
    result = runner.invoke(app, ["preview", "--inp", str(files["round"]), "--out", str(tmp_path / "svg")])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "svg" / "shapes.svg").exists()
    dxf = tmp_path / "round.dxf"
    result = runner.invoke(app, ["export-dxf", "--inp", str(files["round"]), "--out", str(dxf)])
    assert result.exit_code == 0, result.output
    assert dxf.exists()


def test_check(files, tmp_path):
    result = runner.invoke(app, ["check", "--inp", str(files["a"])])
    assert result.exit_code == 0, result.output
    assert "OK" in result.output
    bow = tmp_path / "bow.shape"
    bow.write_text("SHAPE bow\nMOVE 0,0\nLINE 10,10\nLINE 10,0\nLINE 0,10\nCLOSE\nEND\n")
    result = runner.invoke(app, ["check", "--inp", str(bow)])
    assert result.exit_code == 1
    assert "bow: self-intersecting" in result.output
    shared = tmp_path / "shared.shape"
    shared.write_text(
        "SHAPE two\nMOVE 0,0\nLINE 10,0\nLINE 10,10\nCLOSE\n"
        "MOVE 0,0\nLINE -10,0\nLINE -10,-10\nCLOSE\nEND\n"
    )
    result = runner.invoke(app, ["check", "--inp", str(shared)])
    assert result.exit_code == 0, result.output


@pytest.mark.parametrize("command, options_text, message", [
    ("lines", "flatness: fine\n", "flatness must be a number"),
    ("lines", "flatness: .inf\n", "flatness must be finite"),
    ("points", "store_on_close: maybe\n", "store_on_close must be true or false"),
    ("export-dxf", "units: 5\n", "units must be mm, in or unitless"),
    ("lines", "- 0.2\n", "expected a mapping"),
])
def test_bad_options_file(files, tmp_path, command, options_text, message):
    opts = tmp_path / "options.yml"
    opts.write_text(options_text)
    out = tmp_path / "out.bin"
    result = runner.invoke(
        app, [command, "--inp", str(files["round"]), "--out", str(out), "--options", str(opts)]
    )
    assert result.exit_code == 1
    assert message in result.output
    assert not out.exists()
