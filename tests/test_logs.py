from __future__ import annotations

import logging

import pytest

from covgate.logs import ActionsFormatter, configure_logging, running_in_actions


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("covgate", level, __file__, 1, msg, None, None)


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (logging.DEBUG, "::debug::fetched"),
        (logging.INFO, "fetched"),
        (logging.WARNING, "::warning::fetched"),
        (logging.ERROR, "::error::fetched"),
    ],
)
def test_actions_formatter_annotations(level: int, expected: str) -> None:
    assert ActionsFormatter("%(message)s").format(_record(level, "fetched")) == expected


def test_actions_formatter_escapes_multiline_annotations() -> None:
    text = ActionsFormatter("%(message)s").format(_record(logging.ERROR, "failed: 50%\nsecond line"))
    assert text == "::error::failed: 50%25%0Asecond line"


def test_running_in_actions() -> None:
    assert running_in_actions({"GITHUB_ACTIONS": "true"})
    assert not running_in_actions({})


@pytest.mark.parametrize(
    ("quiet", "verbose", "level"),
    [(False, False, logging.INFO), (True, False, logging.ERROR), (False, True, logging.DEBUG)],
)
def test_configure_logging_levels(*, quiet: bool, verbose: bool, level: int) -> None:
    configure_logging(quiet=quiet, verbose=verbose, actions=False)
    root = logging.getLogger()
    assert root.level == level
    assert not isinstance(root.handlers[0].formatter, ActionsFormatter)


def test_configure_logging_uses_annotations_in_actions(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    configure_logging()
    assert isinstance(logging.getLogger().handlers[0].formatter, ActionsFormatter)
