"""Create-or-update of the single coverage report comment on a pull request.

The platform has no "upsert by marker" primitive, so the report is located by listing comments
and matching :data:`~covgate.config.COMMENT_MARKER`. The list-then-write sequence is not atomic:
two concurrent runs on the same pull request can both miss and both create a comment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covgate import logger
from covgate.config import COMMENT_MARKER
from covgate.errors import ConfigError
from covgate.github.client import GitHubClient
from covgate.render.markdown import render_report

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covgate.github.client import CommentsAPI, IssueComment
    from covgate.model.results import CheckResult, RepositoryContext


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    comment_id: int
    created: bool


def find_report_comment(comments: Sequence[IssueComment]) -> IssueComment | None:
    return next((c for c in comments if COMMENT_MARKER in c.body), None)


def upsert_report(
    client: CommentsAPI,
    repo: RepositoryContext,
    pull_request_id: int,
    body: str,
) -> PublishOutcome:
    existing = find_report_comment(client.list_issue_comments(repo, pull_request_id))
    if existing is not None:
        logger.info("updating coverage comment %d on %s#%d", existing.id, repo.full_name, pull_request_id)
        updated = client.update_issue_comment(repo, existing.id, body)
        return PublishOutcome(comment_id=updated.id, created=False)

    logger.info("creating coverage comment on %s#%d", repo.full_name, pull_request_id)
    created = client.create_issue_comment(repo, pull_request_id, body)
    return PublishOutcome(comment_id=created.id, created=True)


def publish_report(
    token: str | None,
    repo: RepositoryContext,
    results: Sequence[CheckResult],
    *,
    client: CommentsAPI | None = None,
    api_url: str | None = None,
) -> PublishOutcome:
    """Render *results* and post them to ``repo.pull_request_id``, replacing an earlier report."""
    if repo.pull_request_id is None:
        msg = f"no pull request to comment on for {repo.full_name}"
        raise ConfigError(msg)
    body = render_report(results)

    if client is not None:
        return upsert_report(client, repo, repo.pull_request_id, body)

    if not token:
        msg = "a GitHub token is required to post the coverage comment"
        raise ConfigError(msg)
    kwargs = {"base_url": api_url} if api_url else {}
    with GitHubClient(token, **kwargs) as gh:
        return upsert_report(gh, repo, repo.pull_request_id, body)


__all__ = ["PublishOutcome", "find_report_comment", "publish_report", "upsert_report"]
