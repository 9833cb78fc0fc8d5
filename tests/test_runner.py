from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pytest

from covgate.checks.extract import extract_total_coverage
from covgate.errors import ToolNotFoundError
from covgate.tools.runner import CommandResult, SubprocessRunner

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell scripts as stub tools")


def _install_tool(bin_dir: Path, name: str, script: str) -> None:
    tool = bin_dir / name
    tool.write_text(f"#!/bin/sh\n{script}\n", encoding="utf-8")
    tool.chmod(0o755)


@pytest.fixture
def bin_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Directory placed first on PATH for stub executables."""
    path = tmp_path / "bin"
    path.mkdir()
    monkeypatch.setenv("PATH", f"{path}:/usr/bin:/bin")
    return path


def test_captures_stdout_stderr_and_status(bin_dir: Path) -> None:
    _install_tool(bin_dir, "fake-tool", "echo out; echo err >&2; exit 3")
    result = SubprocessRunner()(["fake-tool", "a b"])
    assert result == CommandResult(args=("fake-tool", "a b"), returncode=3, stdout="out\n", stderr="err\n")
    assert not result.ok
    assert result.command_line == "fake-tool 'a b'"


def test_missing_executable_raises_tool_not_found(bin_dir: Path) -> None:
    with pytest.raises(ToolNotFoundError, match="definitely-not-installed"):
        SubprocessRunner()(["definitely-not-installed"])


def test_undecodable_output_is_replaced(bin_dir: Path) -> None:
    _install_tool(bin_dir, "fake-tool", r"printf 'ok \377\376 caf\351\n'")
    result = SubprocessRunner()(["fake-tool"])
    assert result.ok
    assert result.stdout.startswith("ok ")
    assert "�" in result.stdout


def test_extractor_survives_non_utf8_tool_output(bin_dir: Path) -> None:
    _install_tool(bin_dir, "coverage-report", r"printf 'Total: 87.50%%\n\377\376 src/caf\351.py\n'")
    assert extract_total_coverage("coverage.xml") == pytest.approx(87.5)
