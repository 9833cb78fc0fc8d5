"""Badge references and number formatting shared by the renderers.

Badges are plain shields.io image URLs; nothing here performs network access.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

BADGE_BASE_URL = "https://img.shields.io/badge"

UNKNOWN_COLOR = "lightgrey"
PASS_COLOR = "brightgreen"
FAIL_COLOR = "red"

_CENTS = Decimal("0.01")


def _two_decimals(value: float) -> str:
    # Ties on the exact binary value round away from zero.
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_coverage(coverage: float | None) -> str:
    """Two-decimal percentage text, ``?`` when unknown."""
    return _two_decimals(coverage) if coverage is not None else "?"


def format_number(value: float) -> str:
    """Shortest text for a threshold: ``80`` rather than ``80.0``, ``72.5`` as is."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_diff(coverage: float, min_required: float) -> str:
    diff = coverage - min_required
    sign = "+" if diff >= 0 else ""
    return f"{sign}{_two_decimals(diff)}"


def coverage_color(coverage: float | None, min_required: float) -> str:
    if coverage is None:
        return UNKNOWN_COLOR
    if coverage >= min_required:
        if coverage >= 90:  # noqa: PLR2004
            return "brightgreen"
        if coverage >= 80:  # noqa: PLR2004
            return "green"
        if coverage >= 70:  # noqa: PLR2004
            return "yellowgreen"
        return "yellow"
    return "orange" if coverage >= 50 else "red"  # noqa: PLR2004


def badge_url(label: str, message: str, color: str, *, style: str | None = None) -> str:
    encoded = message.replace("%", "%25")
    url = f"{BADGE_BASE_URL}/{label}-{encoded}-{color}"
    if style:
        url = f"{url}?style={style}"
    return url


def badge(label: str, message: str, color: str, *, style: str | None = None) -> str:
    """Markdown image for a shields.io badge; the alt text keeps the unescaped message."""
    return f"![{label}: {message}]({badge_url(label, message, color, style=style)})"


def status_badge(*, passed: bool) -> str:
    return badge("status", "passing" if passed else "failing", PASS_COLOR if passed else FAIL_COLOR)


__all__ = [
    "BADGE_BASE_URL",
    "badge",
    "badge_url",
    "coverage_color",
    "format_coverage",
    "format_diff",
    "format_number",
    "status_badge",
]
