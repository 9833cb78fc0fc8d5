from __future__ import annotations

import logging
from pathlib import Path

import pytest

from covgate.config import Settings
from covgate.errors import BranchFetchError
from covgate.model.results import RepositoryContext
from covgate.run import NO_CHECKS_WARNING, execute
from tests.fakes import FakeComments, FakeRunner, failed, ok

PR = RepositoryContext(owner="octo", name="widgets", pull_request_id=7)


def _settings(**overrides: object) -> Settings:
    base: dict[str, object] = {"coverage_file": Path("coverage.xml"), "base_branch": "main", "token": "t"}
    base.update(overrides)
    return Settings(**base)  # type: ignore[arg-type]


def test_no_thresholds_warns_and_passes(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    runner, comments = FakeRunner(), FakeComments()
    outcome = execute(_settings(context=PR), runner=runner, client=comments)
    assert outcome.passed is True
    assert outcome.results == []
    assert runner.calls == []
    assert comments.created == []
    assert any(r.levelno == logging.WARNING and r.getMessage() == NO_CHECKS_WARNING for r in caplog.records)


def test_fetch_failure_aborts_without_comment() -> None:
    runner = FakeRunner({"git": failed(stderr="fatal: couldn't find remote ref release")})
    comments = FakeComments()
    with pytest.raises(BranchFetchError, match="release"):
        execute(
            _settings(base_branch="release", min_overall=80.0, min_new_code=90.0, context=PR),
            runner=runner,
            client=comments,
        )
    assert comments.comments == {}


def test_failing_checks_are_described() -> None:
    runner = FakeRunner({
        "diff-cover": ok(stdout="Diff Coverage: 95.0%"),
        "coverage-report": ok(stdout="Total: 75.00%"),
    })
    comments = FakeComments()
    outcome = execute(_settings(min_overall=80.0, min_new_code=90.0, context=PR), runner=runner, client=comments)
    assert outcome.passed is False
    assert outcome.message == "❌ Coverage check(s) failed: overall (current: 75.00%, expected: 80%)"
    assert len(comments.created) == 1
    assert "![Overall: Failing]" in comments.comments[comments.created[0]]


def test_passing_run_posts_comment() -> None:
    runner = FakeRunner({"lcov": ok(stdout="  lines......: 91.0% (91 of 100 lines)")})
    comments = FakeComments()
    outcome = execute(
        _settings(coverage_file=Path("coverage.info"), min_overall=90.0, context=PR),
        runner=runner,
        client=comments,
    )
    assert outcome.passed is True
    assert outcome.message == "✅ All coverage checks passed"
    assert len(comments.created) == 1


@pytest.mark.parametrize("context", [None, RepositoryContext("octo", "widgets", None)])
def test_outside_pull_request_no_comment(context: RepositoryContext | None) -> None:
    runner = FakeRunner({"coverage-report": ok(stdout="Total: 95.00%")})
    comments = FakeComments()
    outcome = execute(_settings(min_overall=80.0, context=context), runner=runner, client=comments)
    assert outcome.passed is True
    assert comments.comments == {}
