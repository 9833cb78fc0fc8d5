from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from covgate.checks.diff import check_diff_coverage
from covgate.checks.extract import check_overall
from covgate.render.badges import format_coverage, format_number
from covgate.tools.runner import SubprocessRunner

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covgate.model.results import CheckResult
    from covgate.tools.runner import CommandRunner


def run_checks(
    coverage_file: Path | str,
    base_branch: str,
    min_overall: float | None,
    min_new_code: float | None,
    *,
    runner: CommandRunner | None = None,
) -> list[CheckResult]:
    """Run every configured check, new-code first, and return their results.

    A ``None`` threshold disables its check; with both disabled the list is empty.
    """
    run = runner or SubprocessRunner()
    path = Path(coverage_file)
    results: list[CheckResult] = []

    if min_new_code is not None:
        results.append(check_diff_coverage(path, base_branch, min_new_code, runner=run))

    if min_overall is not None:
        results.append(check_overall(path, min_overall, runner=run))

    return results


def summarize_failures(results: Iterable[CheckResult]) -> str:
    """Describe failing checks as ``type (current: X, expected: Y%)`` joined by commas."""
    parts: list[str] = []
    for r in results:
        if r.passed:
            continue
        current = f"{format_coverage(r.coverage)}%" if r.coverage is not None else "unknown"
        parts.append(f"{r.type} (current: {current}, expected: {format_number(r.min_required)}%)")
    return ", ".join(parts)


__all__ = ["run_checks", "summarize_failures"]
