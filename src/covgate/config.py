"""Central configuration and constants for ``covgate``."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from covgate.errors import ConfigError
from covgate.model.types import FULL_COVERAGE

if TYPE_CHECKING:
    from pathlib import Path

    from covgate.model.results import RepositoryContext

# Invisible token used to find a previously posted report among PR comments.
COMMENT_MARKER = "<!-- coverage-action-comment -->"

REMOTE_NAME = "origin"
REMOTE_PREFIX = f"{REMOTE_NAME}/"

DEFAULT_BASE_BRANCH = "main"

# LCOV tracefiles; everything else goes through coverage-report.
LCOV_SUFFIX = ".info"

# diff-cover prints this when no changed line has coverage data.
NO_DIFF_LINES_SENTINEL = "No lines with coverage information in this diff"

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"


def parse_threshold(value: str | float | None, *, name: str = "threshold") -> float | None:
    """Parse an optional percentage threshold such as ``"80"`` or ``"72.5%"``.

    Blank strings and ``None`` mean the check is disabled.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().rstrip("%").strip()
        if not text:
            return None
        try:
            percent = float(text)
        except ValueError as exc:
            msg = f"invalid {name} value: {value!r}"
            raise ConfigError(msg) from exc
    else:
        percent = float(value)
    if math.isnan(percent) or percent < 0 or percent > FULL_COVERAGE:
        msg = f"{name} out of range (0..100): {value!r}"
        raise ConfigError(msg)
    return percent


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated inputs for a single run."""

    coverage_file: Path
    base_branch: str = DEFAULT_BASE_BRANCH
    token: str | None = None
    min_overall: float | None = None
    min_new_code: float | None = None
    context: RepositoryContext | None = None

    def has_checks(self) -> bool:
        return self.min_overall is not None or self.min_new_code is not None


__all__ = [
    "COMMENT_MARKER",
    "DEFAULT_BASE_BRANCH",
    "LCOV_SUFFIX",
    "LOG_FORMAT",
    "NO_DIFF_LINES_SENTINEL",
    "REMOTE_NAME",
    "REMOTE_PREFIX",
    "Settings",
    "parse_threshold",
]
