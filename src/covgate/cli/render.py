from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from covgate.cli.exit_codes import EXIT_DATAERR, EXIT_NOINPUT
from covgate.model.results import CheckResult
from covgate.render.markdown import render_report


def write_output(text: str, destination: Path | None) -> None:
    """Write output to stdout or a file (PATH or '-' for stdout)."""
    if destination is None or destination == Path("-"):
        typer.echo(text)
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text, encoding="utf-8")


def load_results(path: Path) -> list[CheckResult]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        msg = "expected a JSON list of check results"
        raise TypeError(msg)
    results = []
    for item in data:
        if not isinstance(item, dict):
            msg = f"expected a JSON object per check result, got {item!r}"
            raise TypeError(msg)
        results.append(CheckResult.from_dict(item))
    return results


def render_cmd(
    results_json: Annotated[
        Path,
        typer.Argument(help="JSON list of results: {type, coverage, min_required, output?}."),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write output to PATH (use '-' for stdout)."),
    ] = None,
) -> None:
    """Render the pull-request comment for previously computed results."""
    if not results_json.is_file():
        typer.echo(f"ERROR: results file not found: {results_json}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT)
    try:
        results = load_results(results_json)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        typer.echo(f"ERROR: invalid results file: {exc}", err=True)
        raise typer.Exit(code=EXIT_DATAERR) from exc
    write_output(render_report(results), output)


def register(app: typer.Typer) -> None:
    app.command("render")(render_cmd)


__all__ = ["register"]
