#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, NoReturn

import typer

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from svgcheck import ValidationOptions, resolve_validation_options, validate  # noqa: E402
from svgcheck.config import load_thresholds  # noqa: E402
from svgdoc import (  # noqa: E402
    DocumentValidationError,
    SvgDocError,
    optimize_document,
    save_svg,
    transform_multiple,
)
from svgdoc.processor import process_document  # noqa: E402
from svgdoc.spec_loader import load_spec  # noqa: E402
from svgdoc.transform import TransformStep  # noqa: E402

app = typer.Typer(
    add_completion=False,
    help="Validate, optimize, transform and render structured SVG documents.",
)

SPEC_ARGUMENT = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Document spec (.json, .yaml or .yml).",
)


def _fail(exc: SvgDocError) -> NoReturn:
    typer.echo(f"ERROR {exc.code}: {exc.message}", err=True)
    if exc.hint:
        typer.echo(f"HINT: {exc.hint}", err=True)
    raise typer.Exit(code=1)


def _emit(payload: dict[str, Any], report: Path | None) -> None:
    text = json.dumps(payload, indent=2, sort_keys=True)
    if report is not None:
        report.write_text(text)
    typer.echo(text)


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level."),
) -> None:
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@app.command("process")
def process(
    spec_path: Path = SPEC_ARGUMENT,
    output_svg: Path = typer.Argument(..., dir_okay=False, help="Output SVG path."),
    report: Path | None = typer.Option(
        None, "--report", "-o", dir_okay=False, help="Optional path to write the JSON result."
    ),
) -> None:
    """Run transform, optimize, validate and render; write the SVG."""
    try:
        spec = load_spec(spec_path)
        result = process_document(spec)
        output_svg.parent.mkdir(parents=True, exist_ok=True)
        output_svg.write_text(result.svg, encoding="utf-8")
    except DocumentValidationError as exc:
        typer.echo(f"ERROR {exc.code}: {exc.message}", err=True)
        for error in exc.errors:
            typer.echo(f"  {error}", err=True)
        typer.echo(f"HINT: {exc.hint}", err=True)
        raise typer.Exit(code=1)
    except SvgDocError as exc:
        _fail(exc)
    payload = result.to_dict()
    payload.pop("svg")
    _emit(payload, report)


@app.command("validate")
def validate_command(
    spec_path: Path = SPEC_ARGUMENT,
    preset: str = typer.Option("standard", "--preset", "-p", help="Validation preset."),
    thresholds: Path | None = typer.Option(
        None,
        "--thresholds",
        "-t",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Optional validator thresholds YAML.",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-o", dir_okay=False, help="Optional path to write the JSON report."
    ),
) -> None:
    """Validate a document spec and emit a JSON report."""
    try:
        spec = load_spec(spec_path)
        options: ValidationOptions = resolve_validation_options(preset)
        if thresholds is not None:
            options = replace(options, thresholds=load_thresholds(thresholds))
        result = validate(spec.document, options)
    except SvgDocError as exc:
        _fail(exc)
    _emit(result.to_dict(), report)
    raise typer.Exit(code=0 if result.valid else 1)


@app.command("optimize")
def optimize(
    spec_path: Path = SPEC_ARGUMENT,
    preset: str = typer.Option("balanced", "--preset", "-p", help="Optimization preset."),
    output_svg: Path | None = typer.Option(
        None, "--svg", dir_okay=False, help="Optional path to write the optimized SVG."
    ),
    report: Path | None = typer.Option(
        None, "--report", "-o", dir_okay=False, help="Optional path to write the JSON result."
    ),
) -> None:
    """Optimize a document spec and emit the optimized document with statistics."""
    try:
        spec = load_spec(spec_path)
        result = optimize_document(spec.document, preset)
        if output_svg is not None:
            save_svg(result.optimized_document, output_svg)
    except SvgDocError as exc:
        _fail(exc)
    _emit(result.to_dict(), report)


@app.command("transform")
def transform(
    spec_path: Path = SPEC_ARGUMENT,
    steps: str | None = typer.Option(
        None,
        "--steps",
        help='JSON list of steps, e.g. \'[{"type": "scale", "params": {"x": 2, "y": 2}}]\'. '
        "Defaults to the spec's transform list.",
    ),
    output_svg: Path | None = typer.Option(
        None, "--svg", dir_okay=False, help="Optional path to write the transformed SVG."
    ),
    report: Path | None = typer.Option(
        None, "--report", "-o", dir_okay=False, help="Optional path to write the JSON result."
    ),
) -> None:
    """Apply geometric transforms and emit the transformed document."""
    try:
        spec = load_spec(spec_path)
        chain: list[TransformStep | dict[str, Any]] = list(spec.transform)
        if steps is not None:
            try:
                chain = json.loads(steps)
            except json.JSONDecodeError as exc:
                typer.echo(f"ERROR MALFORMED_TRANSFORM: --steps is not valid JSON: {exc}", err=True)
                raise typer.Exit(code=1)
            if not isinstance(chain, list):
                typer.echo("ERROR MALFORMED_TRANSFORM: --steps must be a JSON list", err=True)
                raise typer.Exit(code=1)
        result = transform_multiple(spec.document, chain)
        if output_svg is not None:
            save_svg(result.transformed_document, output_svg)
    except SvgDocError as exc:
        _fail(exc)
    _emit(result.to_dict(), report)


if __name__ == "__main__":
    app(prog_name="svgdoc")
