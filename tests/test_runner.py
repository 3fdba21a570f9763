"""Tests for the subprocess runner."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from shellkit.errors import ExternalToolError, NotFoundError
from shellkit.tools.runner import run_command


def test_run_command_captures_output(tmp_path: Path) -> None:
    result = run_command([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_run_command_passes_input() -> None:
    result = run_command([sys.executable, "-c", "import sys; print(sys.stdin.read().upper())"], input="abc")
    assert result.stdout.strip() == "ABC"


def test_run_command_nonzero_exit() -> None:
    with pytest.raises(ExternalToolError) as exc_info:
        run_command([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])
    assert exc_info.value.returncode == 3
    assert "boom" in str(exc_info.value)


def test_run_command_nonzero_exit_unchecked() -> None:
    result = run_command([sys.executable, "-c", "raise SystemExit(2)"], check=False)
    assert result.returncode == 2


def test_run_command_missing_binary(tmp_path: Path) -> None:
    with pytest.raises(ExternalToolError, match="cannot run"):
        run_command([str(tmp_path / "no-such-tool")])


def test_run_command_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "gone"
    with pytest.raises(NotFoundError, match=str(missing)):
        run_command([sys.executable, "-c", "pass"], cwd=missing)
