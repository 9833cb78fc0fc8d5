"""Shared type aliases and enumerations used across covgate."""

from __future__ import annotations

from enum import StrEnum


class CheckType(StrEnum):
    """Which threshold a check result evaluates."""

    OVERALL = "overall"
    NEW_CODE = "new-code"


FULL_COVERAGE: float = 100.0


__all__ = [
    "FULL_COVERAGE",
    "CheckType",
]
