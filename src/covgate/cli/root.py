from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from covgate import __version__
from covgate.cli import check, render


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(f"covgate {__version__}")
        raise typer.Exit


def create_app() -> typer.Typer:
    app = typer.Typer(help="Enforce coverage thresholds in CI and report them on the pull request.")

    @app.callback()
    def _root(
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit", callback=_version_callback, is_eager=True),
        ] = False,
    ) -> None:
        pass

    check.register(app)
    render.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
