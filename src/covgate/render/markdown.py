"""Markdown report posted as the pull-request comment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgate.config import COMMENT_MARKER
from covgate.model.types import CheckType
from covgate.render.badges import (
    FAIL_COLOR,
    PASS_COLOR,
    UNKNOWN_COLOR,
    badge,
    coverage_color,
    format_coverage,
    format_diff,
    format_number,
    status_badge,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covgate.model.results import CheckResult

TITLE = "## 📊 Coverage Report"
TABLE_HEADER = "| Type | Coverage | Required | Status |\n|------|----------|----------|--------|\n"
DETAILS_SUMMARY = "📋 View detailed diff-cover report"

# Row order in the table is fixed, independent of the order checks ran in.
ROW_LABELS: tuple[tuple[CheckType, str], ...] = (
    (CheckType.OVERALL, "📦 Overall Project"),
    (CheckType.NEW_CODE, "🆕 New Code (Diff)"),
)


def _find(results: Sequence[CheckResult], check_type: CheckType) -> CheckResult | None:
    return next((r for r in results if r.type == check_type), None)


def _coverage_cell(result: CheckResult) -> str:
    if result.coverage is None:
        return badge("coverage", "unknown", UNKNOWN_COLOR)
    coverage_badge = badge(
        "coverage",
        f"{format_coverage(result.coverage)}%",
        coverage_color(result.coverage, result.min_required),
    )
    diff_color = PASS_COLOR if result.coverage >= result.min_required else FAIL_COLOR
    diff_badge = badge("diff", f"{format_diff(result.coverage, result.min_required)}%", diff_color)
    return f"{coverage_badge} {diff_badge}"


def _table_row(label: str, result: CheckResult) -> str:
    return (
        f"| **{label}** | {_coverage_cell(result)} | {format_number(result.min_required)}% "
        f"| {status_badge(passed=result.passed)} |\n"
    )


def _details(output: str) -> str:
    return f"<details>\n<summary>{DETAILS_SUMMARY}</summary>\n\n```\n{output.strip()}\n```\n</details>\n\n"


def _footer(*, passed: bool) -> str:
    status = "Passing" if passed else "Failing"
    color = PASS_COLOR if passed else FAIL_COLOR
    return f"---\n{badge('Overall', status, color, style='for-the-badge')}"


def render_report(results: Sequence[CheckResult]) -> str:
    """Render *results* as the markdown comment body.

    The first line is :data:`~covgate.config.COMMENT_MARKER`, which the publisher relies on to
    find and replace an earlier report.
    """
    parts = [f"{COMMENT_MARKER}\n{TITLE}\n\n", TABLE_HEADER]

    for check_type, label in ROW_LABELS:
        result = _find(results, check_type)
        if result is not None:
            parts.append(_table_row(label, result))
    parts.append("\n")

    new_code = _find(results, CheckType.NEW_CODE)
    if new_code is not None and new_code.output and new_code.output.strip():
        parts.append(_details(new_code.output))

    parts.append(_footer(passed=all(r.passed for r in results)))
    return "".join(parts)


__all__ = ["render_report"]
