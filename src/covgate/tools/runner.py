"""Thin wrapper around external command execution.

Evaluators receive a :class:`CommandRunner` instead of calling :mod:`subprocess` directly, so
tests can replay scripted tool output without spawning processes.
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from covgate import logger
from covgate.errors import ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr text."""
        if self.stdout and self.stderr:
            sep = "" if self.stdout.endswith("\n") else "\n"
            return f"{self.stdout}{sep}{self.stderr}"
        return self.stdout or self.stderr

    @property
    def command_line(self) -> str:
        return shlex.join(self.args)


class CommandRunner(Protocol):
    def __call__(self, args: Sequence[str]) -> CommandResult: ...


class SubprocessRunner:
    """Run commands synchronously, capturing text output; never raises on non-zero exit.

    Output is decoded as UTF-8 with undecodable bytes replaced, so a stray byte in a file
    listing cannot abort the run.
    """

    def __call__(self, args: Sequence[str]) -> CommandResult:
        argv = tuple(args)
        logger.debug("running %s", shlex.join(argv))
        try:
            proc = subprocess.run(  # noqa: S603 - argv is built internally, no shell
                argv,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            msg = f"failed to invoke {argv[0]}: {exc}"
            raise ToolNotFoundError(msg) from exc
        return CommandResult(args=argv, returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


__all__ = ["CommandResult", "CommandRunner", "SubprocessRunner"]
