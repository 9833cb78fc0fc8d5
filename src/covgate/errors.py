"""Centralised exception hierarchy for covgate."""

from __future__ import annotations


class CovgateError(Exception):
    """Base class for all custom covgate exceptions."""


class ConfigError(CovgateError):
    """A configuration value was missing or invalid."""


class ToolError(CovgateError):
    """Base class for errors raised while invoking an external tool."""


class ToolNotFoundError(ToolError):
    """An external tool could not be launched (missing from PATH or not executable)."""


class BranchFetchError(CovgateError):
    """The comparison branch could not be fetched from the remote."""

    def __init__(self, branch: str, reason: str) -> None:
        super().__init__(
            f"Failed to fetch branch {branch}: {reason}. Make sure the branch exists and is accessible."
        )
        self.branch = branch
        self.reason = reason


class GitHubAPIError(CovgateError):
    """The GitHub REST API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"GitHub API request failed: {status_code} {body}")
        self.status_code = status_code
        self.body = body


__all__ = [
    "BranchFetchError",
    "ConfigError",
    "CovgateError",
    "GitHubAPIError",
    "ToolError",
    "ToolNotFoundError",
]
