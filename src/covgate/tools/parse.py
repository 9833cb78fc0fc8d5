"""Scrapers for the text printed by the external coverage tools.

Each tool gets its own small parser so that a format change in one tool version only touches one
pattern here.
"""

from __future__ import annotations

import re

from covgate.config import NO_DIFF_LINES_SENTINEL

# lcov --summary:   "  lines......: 85.5% (171 of 200 lines)"
LCOV_LINES_RE = re.compile(r"lines[.\s]+:\s+([0-9.]+)%")
# coverage-report:  "Total: 87.50%"
COVERAGE_REPORT_TOTAL_RE = re.compile(r"Total[:\s]+([0-9.]+)%")
# diff-cover:       "Diff Coverage: 92.5%"
DIFF_COVERAGE_RE = re.compile(r"Diff Coverage:\s+([0-9.]+)%")


def _first_percentage(pattern: re.Pattern[str], text: str) -> float | None:
    match = pattern.search(text)
    if match is None:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        # e.g. "1.2.3%" matches the character class but is not a number
        return None


def parse_lcov_summary(text: str) -> float | None:
    return _first_percentage(LCOV_LINES_RE, text)


def parse_coverage_report_total(text: str) -> float | None:
    return _first_percentage(COVERAGE_REPORT_TOTAL_RE, text)


def parse_diff_coverage(text: str) -> float | None:
    return _first_percentage(DIFF_COVERAGE_RE, text)


def has_no_diff_lines(text: str) -> bool:
    return NO_DIFF_LINES_SENTINEL in text


__all__ = [
    "COVERAGE_REPORT_TOTAL_RE",
    "DIFF_COVERAGE_RE",
    "LCOV_LINES_RE",
    "has_no_diff_lines",
    "parse_coverage_report_total",
    "parse_diff_coverage",
    "parse_lcov_summary",
]
