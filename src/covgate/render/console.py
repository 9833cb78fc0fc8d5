"""Rich table summarising check results for the CI job log."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table

from covgate.render.badges import coverage_color, format_coverage, format_diff, format_number

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covgate.model.results import CheckResult

# shields.io colour names -> rich styles
_RICH_STYLES = {
    "brightgreen": "bold green",
    "green": "green",
    "yellowgreen": "green3",
    "yellow": "yellow",
    "orange": "dark_orange",
    "red": "red",
    "lightgrey": "grey62",
}


def _styled(text: str, color: str) -> str:
    style = _RICH_STYLES.get(color, "")
    return f"[{style}]{text}[/{style}]" if style else text


def render_console_summary(results: Sequence[CheckResult], *, color: bool = True, width: int = 80) -> str:
    table = Table(title="Coverage Checks", box=box.SIMPLE_HEAVY, header_style="bold")
    table.add_column("Type")
    table.add_column("Coverage", justify="right")
    table.add_column("Required", justify="right")
    table.add_column("Diff", justify="right")
    table.add_column("Status")

    for r in results:
        if r.coverage is None:
            coverage = _styled("unknown", "lightgrey")
            diff = ""
        else:
            coverage = _styled(f"{format_coverage(r.coverage)}%", coverage_color(r.coverage, r.min_required))
            diff = _styled(
                f"{format_diff(r.coverage, r.min_required)}%",
                "brightgreen" if r.coverage >= r.min_required else "red",
            )
        status = _styled("passing", "brightgreen") if r.passed else _styled("failing", "red")
        table.add_row(str(r.type), coverage, f"{format_number(r.min_required)}%", diff, status)

    buf = StringIO()
    console = Console(file=buf, force_terminal=color, no_color=not color, width=width)
    console.print(table)
    return buf.getvalue().rstrip()


__all__ = ["render_console_summary"]
