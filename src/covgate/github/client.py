"""Minimal GitHub REST client for issue comments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from covgate import logger
from covgate.errors import GitHubAPIError

if TYPE_CHECKING:
    from types import TracebackType

    from covgate.model.results import RepositoryContext

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class IssueComment:
    id: int
    body: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> IssueComment:
        return cls(id=int(data["id"]), body=data.get("body") or "")


class CommentsAPI(Protocol):
    """Operations the publisher needs from the pull-request platform."""

    def list_issue_comments(self, repo: RepositoryContext, issue_number: int) -> list[IssueComment]: ...

    def create_issue_comment(self, repo: RepositoryContext, issue_number: int, body: str) -> IssueComment: ...

    def update_issue_comment(self, repo: RepositoryContext, comment_id: int, body: str) -> IssueComment: ...


class GitHubClient:
    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = self._http.request(method, url, **kwargs)
        if response.status_code >= 300:  # noqa: PLR2004
            raise GitHubAPIError(response.status_code, response.text)
        return response

    def list_issue_comments(self, repo: RepositoryContext, issue_number: int) -> list[IssueComment]:
        """Return every comment on the issue/PR, following ``Link: rel="next"`` pagination."""
        comments: list[IssueComment] = []
        url: str | None = f"/repos/{repo.full_name}/issues/{issue_number}/comments"
        params: dict[str, Any] | None = {"per_page": PAGE_SIZE}
        while url is not None:
            response = self._request("GET", url, params=params)
            comments.extend(IssueComment.from_api(item) for item in response.json())
            url = response.links.get("next", {}).get("url")
            # the next link already carries the query string
            params = None
        logger.debug("fetched %d comment(s) from %s#%d", len(comments), repo.full_name, issue_number)
        return comments

    def create_issue_comment(self, repo: RepositoryContext, issue_number: int, body: str) -> IssueComment:
        response = self._request(
            "POST",
            f"/repos/{repo.full_name}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return IssueComment.from_api(response.json())

    def update_issue_comment(self, repo: RepositoryContext, comment_id: int, body: str) -> IssueComment:
        response = self._request(
            "PATCH",
            f"/repos/{repo.full_name}/issues/comments/{comment_id}",
            json={"body": body},
        )
        return IssueComment.from_api(response.json())


__all__ = ["DEFAULT_API_URL", "CommentsAPI", "GitHubClient", "IssueComment"]
