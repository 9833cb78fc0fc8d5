"""Logging setup for the CLI entry point."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from covgate.config import LOG_FORMAT

if TYPE_CHECKING:
    from collections.abc import Mapping

# GitHub Actions workflow commands, see "Workflow commands for GitHub Actions".
_ANNOTATIONS = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


class ActionsFormatter(logging.Formatter):
    """Render records so the Actions runner turns warnings and errors into annotations."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _ANNOTATIONS.get(record.levelno)
        if prefix is None:
            return message
        # workflow commands are single-line; continuation lines must be url-escaped
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"{prefix}{escaped}"


def running_in_actions(env: Mapping[str, str] | None = None) -> bool:
    environ = os.environ if env is None else env
    return environ.get("GITHUB_ACTIONS", "").lower() == "true"


def configure_logging(*, quiet: bool = False, verbose: bool = False, actions: bool | None = None) -> None:
    """Configure root logging from *quiet*/*verbose*; use annotations inside GitHub Actions."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    use_actions = running_in_actions() if actions is None else actions

    handler = logging.StreamHandler()
    handler.setFormatter(ActionsFormatter("%(message)s") if use_actions else logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)


__all__ = ["ActionsFormatter", "configure_logging", "running_in_actions"]
