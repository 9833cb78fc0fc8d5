"""Coverage of changed lines, computed by diff-cover against a fetched base branch."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from covgate import logger
from covgate.config import REMOTE_NAME, REMOTE_PREFIX
from covgate.errors import BranchFetchError, ToolError
from covgate.model.results import CheckResult
from covgate.model.types import FULL_COVERAGE
from covgate.tools.parse import has_no_diff_lines, parse_diff_coverage
from covgate.tools.runner import SubprocessRunner

if TYPE_CHECKING:
    from covgate.tools.runner import CommandRunner


def compare_ref(base_branch: str) -> str:
    """Remote-tracking ref handed to diff-cover (``main`` -> ``origin/main``)."""
    return base_branch if base_branch.startswith(REMOTE_PREFIX) else f"{REMOTE_PREFIX}{base_branch}"


def branch_name(base_branch: str) -> str:
    """Bare branch name used for the fetch (``origin/main`` -> ``main``)."""
    return base_branch.removeprefix(REMOTE_PREFIX)


def fetch_base_branch(base_branch: str, *, runner: CommandRunner) -> None:
    """Shallow-fetch *base_branch* into its remote-tracking ref.

    Raises
    ------
    BranchFetchError
        If git cannot be launched or the fetch exits non-zero.
    """
    name = branch_name(base_branch)
    argv = ["git", "fetch", REMOTE_NAME, f"{name}:refs/remotes/{REMOTE_PREFIX}{name}", "--depth=1"]
    try:
        result = runner(argv)
    except ToolError as exc:
        raise BranchFetchError(name, str(exc)) from exc
    if not result.ok:
        reason = result.stderr.strip() or f"{result.command_line} exited with status {result.returncode}"
        raise BranchFetchError(name, reason)


def run_diff_cover(coverage_file: Path, base_branch: str, *, runner: CommandRunner) -> str:
    # diff-cover exits non-zero when it dislikes the numbers; its report is still what we want
    argv = ["diff-cover", str(coverage_file), f"--compare-branch={compare_ref(base_branch)}"]
    try:
        result = runner(argv)
    except ToolError as exc:
        logger.error("diff-cover could not be run: %s", exc)
        return str(exc)
    if result.ok:
        return result.stdout
    return result.stdout or result.stderr or f"{result.command_line} exited with status {result.returncode}"


def check_diff_coverage(
    coverage_file: Path | str,
    base_branch: str,
    min_required: float,
    *,
    runner: CommandRunner | None = None,
) -> CheckResult:
    """Evaluate coverage of the lines changed relative to *base_branch*."""
    run = runner or SubprocessRunner()
    path = Path(coverage_file)
    logger.info("📦 Running diff-cover on %s vs %s", path, base_branch)

    fetch_base_branch(base_branch, runner=run)
    output = run_diff_cover(path, base_branch, runner=run)

    coverage: float | None
    if has_no_diff_lines(output):
        logger.info("No lines with coverage information found in the diff - considering this as passing")
        coverage = FULL_COVERAGE
    else:
        coverage = parse_diff_coverage(output)
        if coverage is None:
            logger.warning("could not find a diff coverage figure in diff-cover output")

    logger.info("diff-cover output\n\n%s", output)
    return CheckResult.for_new_code(coverage, min_required, output)


__all__ = [
    "branch_name",
    "check_diff_coverage",
    "compare_ref",
    "fetch_base_branch",
    "run_diff_cover",
]
