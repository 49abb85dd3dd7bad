import json
import logging
from pathlib import Path
from typing import Optional, List, Dict, Any

import typer

from ..dsl.dsl_parser import parse_dsl, format_dsl, Shape
from ..dsl.to_svg import shapes_to_svg
from ..geometry.errors import PathError
from ..geometry.extract import extract_lines, extract_points
from ..geometry.flatten import check_flatness
from ..geometry.interpolate import interpolate
from ..validators.intersections import subpath_polylines, has_self_intersections
# DXF exporter is imported inside the command to avoid hard dependency at import-time

app = typer.Typer(help="shapekit CLI")

DEFAULT_OPTIONS: Dict[str, Any] = {"flatness": 0.2, "store_on_close": False, "units": "mm"}


# ---------------------------
# Helpers
# ---------------------------

def _load_shapes(path: Path) -> List[Shape]:
    try:
        return parse_dsl(Path(path).read_text())
    except ValueError as e:
        _fail(f"{path}: {e}")

def _load_options(options: Optional[Path]) -> Dict[str, Any]:
    """Defaults overlaid with an optional options YAML, checked before use."""
    opts = dict(DEFAULT_OPTIONS)
    if options:
        import yaml

        try:
            loaded = yaml.safe_load(Path(options).read_text()) or {}
        except yaml.YAMLError as e:
            _fail(f"{options}: {e}")
        if not isinstance(loaded, dict):
            _fail(f"{options}: expected a mapping of options")
        opts.update(loaded)
    try:
        opts["flatness"] = check_flatness(opts["flatness"])
    except PathError as e:
        _fail(f"{options}: {e}")
    if not isinstance(opts["store_on_close"], bool):
        _fail(f"{options}: store_on_close must be true or false, got {opts['store_on_close']!r}")
    if not isinstance(opts["units"], str):
        _fail(f"{options}: units must be mm, in or unitless, got {opts['units']!r}")
    return opts

def _pick(flag, opts: Dict[str, Any], key: str):
    # explicit CLI flags win over the options file
    return opts[key] if flag is None else flag

def _fail(message: str):
    typer.echo(message, err=True)
    raise typer.Exit(code=1)

def _write_json(out: Path, payload: Dict[str, Any]) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2))


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------
# Commands
# ---------------------------

@app.command()
def lines(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL file"),
    out: Path = typer.Option(..., help="Output JSON"),
    flatness: Optional[float] = typer.Option(None, help="Flatten tolerance (default 0.2)"),
    options: Optional[Path] = typer.Option(None, exists=True, help="Options YAML"),
):
    """Flatten shapes and write their line segments as JSON."""
    opts = _load_options(options)
    tol = _pick(flatness, opts, "flatness")
    shapes_out = []
    try:
        for shape in _load_shapes(inp):
            segs = extract_lines(shape, tol)
            shapes_out.append(
                {"name": shape.name, "lines": [[list(s.start), list(s.end)] for s in segs]}
            )
    except PathError as e:
        _fail(str(e))
    _write_json(out, {"flatness": tol, "shapes": shapes_out})
    typer.echo(f"Wrote line segments to {out}")


@app.command()
def points(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL file"),
    out: Path = typer.Option(..., help="Output JSON"),
    flatness: Optional[float] = typer.Option(None, help="Flatten tolerance (default 0.2)"),
    store_on_close: Optional[bool] = typer.Option(
        None, "--store-on-close/--no-store-on-close", help="Repeat the move point on CLOSE"
    ),
    options: Optional[Path] = typer.Option(None, exists=True, help="Options YAML"),
):
    """Flatten shapes and write their points as JSON."""
    opts = _load_options(options)
    tol = _pick(flatness, opts, "flatness")
    soc = bool(_pick(store_on_close, opts, "store_on_close"))
    shapes_out = []
    try:
        for shape in _load_shapes(inp):
            pts = extract_points(shape, tol, soc)
            shapes_out.append({"name": shape.name, "points": [list(p) for p in pts]})
    except PathError as e:
        _fail(str(e))
    _write_json(out, {"flatness": tol, "store_on_close": soc, "shapes": shapes_out})
    typer.echo(f"Wrote points to {out}")


@app.command("interpolate")
def interpolate_cmd(
    first: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL at alpha=0"),
    second: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL at alpha=1"),
    alpha: float = typer.Option(0.5, help="Blend factor, may lie outside [0,1]"),
    out: Path = typer.Option(..., help="Output shape DSL"),
):
    """
    Blend two files of structurally equal shapes.
    Shapes are paired by position; names are taken from the first file.
    """
    shapes0 = _load_shapes(first)
    shapes1 = _load_shapes(second)
    if len(shapes0) != len(shapes1):
        _fail(f"shape count differs: {len(shapes0)} vs. {len(shapes1)}")
    blended: List[Shape] = []
    for s0, s1 in zip(shapes0, shapes1):
        try:
            blended.append(Shape(name=s0.name, path=interpolate(s0, s1, alpha)))
        except PathError as e:
            _fail(f"{s0.name} / {s1.name}: {e}")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(format_dsl(blended))
    typer.echo(f"Wrote {len(blended)} interpolated shapes to {out}")


@app.command()
def preview(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL file"),
    out: Path = typer.Option(..., help="Output directory for SVG preview"),
    flatness: Optional[float] = typer.Option(None, help="Also draw flattened points at this tolerance"),
):
    """
    Preview shapes as SVG (simple layout).
    Writes one SVG combining shapes for quick visual checks.
    """
    out.mkdir(parents=True, exist_ok=True)
    svg_path = out / "shapes.svg"
    try:
        shapes_to_svg(_load_shapes(inp), str(svg_path), flatness=flatness)
    except PathError as e:
        _fail(str(e))
    typer.echo(f"Wrote {svg_path}")


@app.command("export-dxf")
def export_dxf_cmd(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL file"),
    out: Path = typer.Option(..., help="Output DXF path"),
    units: Optional[str] = typer.Option(None, help="Units for $INSUNITS (mm|in|unitless)"),
    flatness: Optional[float] = typer.Option(None, help="Bezier flatten tolerance"),
    options: Optional[Path] = typer.Option(None, exists=True, help="Options YAML"),
):
    """Export flattened shapes to DXF (AC1018) as LINE entities."""
    from ..packaging.dxf_exporter import export_dxf  # import here to keep CLI import light

    opts = _load_options(options)
    shapes = _load_shapes(inp)
    out.parent.mkdir(parents=True, exist_ok=True)
    try:
        path = export_dxf(
            shapes,
            str(out),
            units=_pick(units, opts, "units"),
            flatness=_pick(flatness, opts, "flatness"),
        )
    except PathError as e:
        _fail(str(e))
    typer.echo(f"Wrote DXF: {path}")


@app.command()
def check(
    inp: Path = typer.Option(..., exists=True, dir_okay=False, help="Shape DSL file"),
    flatness: Optional[float] = typer.Option(None, help="Flatten tolerance (default 0.2)"),
    options: Optional[Path] = typer.Option(None, exists=True, help="Options YAML"),
):
    """Report shapes whose flattened outline crosses itself."""
    tol = _pick(flatness, _load_options(options), "flatness")
    bad = []
    try:
        for shape in _load_shapes(inp):
            polylines = subpath_polylines(shape, tol)
            if any(has_self_intersections(pl) for pl in polylines):
                bad.append(shape.name)
    except PathError as e:
        _fail(str(e))
    for name in bad:
        typer.echo(f"{name}: self-intersecting")
    if bad:
        raise typer.Exit(code=1)
    typer.echo("OK")


if __name__ == "__main__":
    app()
