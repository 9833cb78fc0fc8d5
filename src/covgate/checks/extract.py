"""Overall coverage extraction via external report summarizers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from covgate import logger
from covgate.config import LCOV_SUFFIX
from covgate.errors import ToolError
from covgate.model.results import CheckResult
from covgate.tools.parse import parse_coverage_report_total, parse_lcov_summary
from covgate.tools.runner import SubprocessRunner

if TYPE_CHECKING:
    from collections.abc import Callable

    from covgate.tools.runner import CommandRunner


def _summarizer_for(coverage_file: Path) -> tuple[str, list[str], Callable[[str], float | None]]:
    """Return (label, argv, parser) for the summarizer matching *coverage_file*."""
    if coverage_file.name.endswith(LCOV_SUFFIX):
        return "LCOV Summary", ["lcov", "--summary", str(coverage_file)], parse_lcov_summary
    # Cobertura, JaCoCo, Clover, ... anything diff-cover understands
    return "Coverage Report", ["coverage-report", str(coverage_file)], parse_coverage_report_total


def _log_tool_output(label: str, output: str) -> None:
    logger.info("=== %s Output ===", label)
    for line in output.splitlines():
        if line.strip():
            logger.info("%s", line)
    logger.info("=== End %s ===", label)


def extract_total_coverage(
    coverage_file: Path | str,
    *,
    runner: CommandRunner | None = None,
) -> float | None:
    """Return the aggregate coverage percentage of *coverage_file*, or ``None`` if unknown.

    Tool failures and unrecognised output are logged, never raised: an unknown value is a
    legitimate result that renders as a failing ``unknown`` check downstream.
    """
    run = runner or SubprocessRunner()
    path = Path(coverage_file)
    label, argv, parser = _summarizer_for(path)
    logger.info("extracting total coverage from %s", path)

    try:
        result = run(argv)
    except ToolError as exc:
        logger.error("Error extracting total coverage: %s", exc)
        return None

    output = result.output
    _log_tool_output(label, output)

    if not result.ok:
        logger.error(
            "Error extracting total coverage: %s exited with status %d",
            result.command_line,
            result.returncode,
        )
        return None

    coverage = parser(output)
    if coverage is None:
        logger.warning("could not find a total coverage figure in %s output", argv[0])
    return coverage


def check_overall(
    coverage_file: Path | str,
    min_required: float,
    *,
    runner: CommandRunner | None = None,
) -> CheckResult:
    logger.info("📊 Checking overall coverage from %s", coverage_file)
    coverage = extract_total_coverage(coverage_file, runner=runner)
    return CheckResult.for_overall(coverage, min_required)


__all__ = ["check_overall", "extract_total_coverage"]
