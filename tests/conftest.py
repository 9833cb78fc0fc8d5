from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

if TYPE_CHECKING:
    from collections.abc import Iterator

_ENV_VARS = (
    "GITHUB_ACTIONS",
    "GITHUB_API_URL",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_TOKEN",
    "INPUT_BASE-BRANCH",
    "INPUT_COVERAGE-FILE",
    "INPUT_GITHUB-TOKEN",
    "INPUT_MIN-COVERAGE",
    "INPUT_MIN-COVERAGE-NEW-CODE",
    "COVGATE_BASE_BRANCH",
    "COVGATE_COVERAGE_FILE",
    "COVGATE_MIN_COVERAGE",
    "COVGATE_MIN_COVERAGE_NEW_CODE",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep CI variables of the host out of the tests and undo CLI logging setup."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    # drop the plain stream handlers installed by configure_logging
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI runner for invoking the command-line interface."""
    return CliRunner()

