from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covgate import logger
from covgate.checks.orchestrator import run_checks, summarize_failures
from covgate.github.publish import publish_report

if TYPE_CHECKING:
    from covgate.config import Settings
    from covgate.github.client import CommentsAPI
    from covgate.model.results import CheckResult
    from covgate.tools.runner import CommandRunner

NO_CHECKS_WARNING = "No coverage checks enabled. Set min-coverage or min-coverage-new-code to enable checks."


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """What the process should report: overall pass/fail plus a human-readable message."""

    passed: bool
    message: str
    results: list[CheckResult] = field(default_factory=list)


def execute(
    settings: Settings,
    *,
    runner: CommandRunner | None = None,
    client: CommentsAPI | None = None,
    api_url: str | None = None,
) -> RunOutcome:
    """Run the configured checks, publish the report to the PR if there is one, and judge the run.

    Environment failures (unreachable base branch, GitHub API errors) propagate to the caller;
    nothing is posted when a check raises.
    """
    if not settings.has_checks():
        logger.warning(NO_CHECKS_WARNING)
        return RunOutcome(passed=True, message=NO_CHECKS_WARNING)

    results = run_checks(
        settings.coverage_file,
        settings.base_branch,
        settings.min_overall,
        settings.min_new_code,
        runner=runner,
    )

    ctx = settings.context
    if ctx is not None and ctx.pull_request_id is not None:
        logger.info("Posting coverage report as PR comment")
        publish_report(settings.token, ctx, results, client=client, api_url=api_url)
    else:
        logger.info("Not a PR - skipping comment")

    if any(not r.passed for r in results):
        return RunOutcome(
            passed=False,
            message=f"❌ Coverage check(s) failed: {summarize_failures(results)}",
            results=results,
        )
    return RunOutcome(passed=True, message="✅ All coverage checks passed", results=results)


__all__ = ["NO_CHECKS_WARNING", "RunOutcome", "execute"]
