from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer

from covgate import logger
from covgate.cli.exit_codes import EXIT_CONFIG, EXIT_GENERIC, EXIT_NOINPUT, EXIT_OK, EXIT_THRESHOLD
from covgate.config import DEFAULT_BASE_BRANCH, Settings, parse_threshold
from covgate.errors import ConfigError, CovgateError
from covgate.github.context import load_repository_context
from covgate.logs import configure_logging, running_in_actions
from covgate.model.types import CheckType
from covgate.render.console import render_console_summary
from covgate.run import execute


def _summary_color(*, color: bool, no_color: bool) -> bool:
    """Colour the results table on a terminal or in an Actions log unless a flag says otherwise."""
    if no_color or color:
        return not no_color
    if running_in_actions():
        return True
    try:
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    except OSError:
        return False


def _load_settings(
    *,
    coverage_file: Path,
    base_branch: str,
    token: str | None,
    min_coverage: str | None,
    min_coverage_new_code: str | None,
    repository: str | None,
    pr: int | None,
) -> Settings:
    logger.debug("min-coverage input: %r", min_coverage)
    logger.debug("min-coverage-new-code input: %r", min_coverage_new_code)
    min_overall = parse_threshold(min_coverage, name="min-coverage")
    min_new_code = parse_threshold(min_coverage_new_code, name="min-coverage-new-code")
    logger.debug("parsed min-coverage: %s, min-coverage-new-code: %s", min_overall, min_new_code)

    return Settings(
        coverage_file=coverage_file,
        base_branch=base_branch.strip() or DEFAULT_BASE_BRANCH,
        token=token or None,
        min_overall=min_overall,
        min_new_code=min_new_code,
        context=load_repository_context(repository=repository, pr_number=pr),
    )


def check_cmd(
    coverage_file: Annotated[
        Path,
        typer.Option(
            "--coverage-file",
            envvar=["INPUT_COVERAGE-FILE", "COVGATE_COVERAGE_FILE"],
            help="Coverage report: LCOV tracefile (*.info) or XML (Cobertura, JaCoCo, Clover).",
        ),
    ],
    base_branch: Annotated[
        str,
        typer.Option(
            "--base-branch",
            envvar=["INPUT_BASE-BRANCH", "COVGATE_BASE_BRANCH"],
            help="Branch that new code is compared against (with or without 'origin/').",
        ),
    ] = DEFAULT_BASE_BRANCH,
    github_token: Annotated[
        str | None,
        typer.Option(
            "--github-token",
            envvar=["INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"],
            help="Token used to post the report comment.",
            show_default=False,
        ),
    ] = None,
    min_coverage: Annotated[
        str | None,
        typer.Option(
            "--min-coverage",
            envvar=["INPUT_MIN-COVERAGE", "COVGATE_MIN_COVERAGE"],
            help="Fail if overall coverage % is below this value (blank disables the check).",
        ),
    ] = None,
    min_coverage_new_code: Annotated[
        str | None,
        typer.Option(
            "--min-coverage-new-code",
            envvar=["INPUT_MIN-COVERAGE-NEW-CODE", "COVGATE_MIN_COVERAGE_NEW_CODE"],
            help="Fail if coverage % of changed lines is below this value (blank disables the check).",
        ),
    ] = None,
    repository: Annotated[
        str | None,
        typer.Option("--repository", help="owner/name; defaults to GITHUB_REPOSITORY."),
    ] = None,
    pr: Annotated[
        int | None,
        typer.Option("--pr", help="Pull request number; defaults to the one in the event payload.", min=1),
    ] = None,
    *,
    summary: Annotated[
        bool,
        typer.Option("--summary/--no-summary", help="Print a results table to stdout."),
    ] = True,
    color: Annotated[bool, typer.Option("--color", help="Force ANSI colour in the results table")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour in the results table")] = False,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors")] = False,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Emit diagnostic logging")] = False,
) -> None:
    """Run the configured coverage checks and report them on the pull request."""
    configure_logging(quiet=quiet, verbose=verbose)

    try:
        settings = _load_settings(
            coverage_file=coverage_file,
            base_branch=base_branch,
            token=github_token,
            min_coverage=min_coverage,
            min_coverage_new_code=min_coverage_new_code,
            repository=repository,
            pr=pr,
        )
    except ConfigError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=EXIT_CONFIG) from exc

    if settings.has_checks() and not settings.coverage_file.is_file():
        thresholds = ((CheckType.OVERALL, settings.min_overall), (CheckType.NEW_CODE, settings.min_new_code))
        enabled = [check.value for check, minimum in thresholds if minimum is not None]
        logger.error(
            "coverage file not found: %s; failing checks: %s (no report posted)",
            settings.coverage_file,
            ", ".join(enabled),
        )
        raise typer.Exit(code=EXIT_NOINPUT)

    try:
        outcome = execute(settings, api_url=os.environ.get("GITHUB_API_URL"))
    except ConfigError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=EXIT_CONFIG) from exc
    except CovgateError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=EXIT_GENERIC) from exc
    except Exception as exc:
        logger.exception("unexpected failure: %s", exc)
        raise typer.Exit(code=EXIT_GENERIC) from exc

    if summary and outcome.results:
        use_color = _summary_color(color=color, no_color=no_color)
        typer.echo(render_console_summary(outcome.results, color=use_color))

    if not outcome.passed:
        logger.error("%s", outcome.message)
        raise typer.Exit(code=EXIT_THRESHOLD)

    if outcome.results:
        logger.info("%s", outcome.message)
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("check")(check_cmd)


__all__ = ["register"]
