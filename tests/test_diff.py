from __future__ import annotations

import pytest

from covgate.checks.diff import branch_name, check_diff_coverage, compare_ref
from covgate.errors import BranchFetchError, ToolNotFoundError
from covgate.model.types import CheckType
from tests.fakes import FakeRunner, failed, ok

NO_LINES = (
    "-------------\nDiff Coverage\nDiff: origin/main...HEAD\n-------------\n"
    "No lines with coverage information in this diff.\n-------------\n"
)


@pytest.mark.parametrize(
    ("base", "ref", "name"),
    [
        ("main", "origin/main", "main"),
        ("origin/main", "origin/main", "main"),
        ("release/1.x", "origin/release/1.x", "release/1.x"),
        ("origin/release/1.x", "origin/release/1.x", "release/1.x"),
    ],
)
def test_branch_normalisation(base: str, ref: str, name: str) -> None:
    assert compare_ref(base) == ref
    assert branch_name(base) == name


def test_fetches_then_runs_diff_cover() -> None:
    runner = FakeRunner({"diff-cover": ok(stdout="Diff Coverage: 92.5%\n")})
    result = check_diff_coverage("coverage.xml", "origin/main", 90.0, runner=runner)
    assert runner.calls == [
        ("git", "fetch", "origin", "main:refs/remotes/origin/main", "--depth=1"),
        ("diff-cover", "coverage.xml", "--compare-branch=origin/main"),
    ]
    assert result.type is CheckType.NEW_CODE
    assert result.coverage == pytest.approx(92.5)
    assert result.passed is True
    assert result.output == "Diff Coverage: 92.5%\n"


def test_fetch_failure_is_fatal() -> None:
    runner = FakeRunner({"git": failed(stderr="fatal: couldn't find remote ref release", returncode=128)})
    with pytest.raises(BranchFetchError, match="release") as excinfo:
        check_diff_coverage("coverage.xml", "release", 80.0, runner=runner)
    assert "couldn't find remote ref" in str(excinfo.value)
    assert "Make sure the branch exists" in str(excinfo.value)
    assert runner.called("diff-cover") == []


def test_fetch_without_git_is_fatal() -> None:
    runner = FakeRunner({"git": ToolNotFoundError("failed to invoke git: No such file")})
    with pytest.raises(BranchFetchError, match="failed to invoke git"):
        check_diff_coverage("coverage.xml", "main", 80.0, runner=runner)


def test_non_zero_exit_still_uses_stdout() -> None:
    report = "src/app.py (45.0%): Missing lines 3-9\nDiff Coverage: 45.0%\n"
    runner = FakeRunner({"diff-cover": failed(stdout=report, stderr="Failure. Coverage is below 80%.")})
    result = check_diff_coverage("coverage.xml", "main", 80.0, runner=runner)
    assert result.coverage == pytest.approx(45.0)
    assert result.passed is False
    assert result.output == report


def test_non_zero_exit_without_stdout_uses_error_text() -> None:
    runner = FakeRunner({"diff-cover": failed(stderr="diff-cover: error: unrecognized arguments")})
    result = check_diff_coverage("coverage.xml", "main", 80.0, runner=runner)
    assert result.coverage is None
    assert result.passed is False
    assert result.output == "diff-cover: error: unrecognized arguments"


def test_missing_diff_cover_is_unknown_not_fatal() -> None:
    runner = FakeRunner({"diff-cover": ToolNotFoundError("failed to invoke diff-cover: not found")})
    result = check_diff_coverage("coverage.xml", "main", 80.0, runner=runner)
    assert result.coverage is None
    assert result.output == "failed to invoke diff-cover: not found"


@pytest.mark.parametrize("minimum", [0.0, 90.0, 100.0])
def test_no_diff_lines_counts_as_fully_covered(minimum: float) -> None:
    runner = FakeRunner({"diff-cover": ok(stdout=NO_LINES)})
    result = check_diff_coverage("coverage.xml", "main", minimum, runner=runner)
    assert result.coverage == 100.0
    assert result.passed is True
    assert result.output == NO_LINES
