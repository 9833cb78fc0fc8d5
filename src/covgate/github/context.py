"""Repository identity from the GitHub Actions environment."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from covgate import logger
from covgate.errors import ConfigError
from covgate.model.results import RepositoryContext

if TYPE_CHECKING:
    from collections.abc import Mapping


def _load_event(event_path: str | None) -> dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read event payload %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def pull_request_number(event: Mapping[str, Any]) -> int | None:
    """PR number from a ``pull_request*`` event, or from an ``issue_comment`` on a PR."""
    pr = event.get("pull_request")
    if isinstance(pr, dict) and pr.get("number"):
        return int(pr["number"])
    issue = event.get("issue")
    if isinstance(issue, dict) and issue.get("pull_request") and issue.get("number"):
        return int(issue["number"])
    return None


def load_repository_context(
    env: Mapping[str, str] | None = None,
    *,
    repository: str | None = None,
    pr_number: int | None = None,
) -> RepositoryContext | None:
    """Build the :class:`RepositoryContext` for this run.

    Explicit *repository* / *pr_number* win over ``GITHUB_REPOSITORY`` and the event payload at
    ``GITHUB_EVENT_PATH``. Returns ``None`` when no repository can be determined.
    """
    environ = os.environ if env is None else env
    full_name = repository or environ.get("GITHUB_REPOSITORY")
    if not full_name:
        return None

    number = pr_number
    if number is None:
        number = pull_request_number(_load_event(environ.get("GITHUB_EVENT_PATH")))

    try:
        return RepositoryContext.from_full_name(full_name, number)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = ["load_repository_context", "pull_request_number"]
