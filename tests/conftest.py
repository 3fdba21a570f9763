"""Shared test fixtures.

External commands are replaced by ``FakeRunner``, which records every
call and answers from a table of canned results keyed by argv prefix.
Tests that need a real ``git`` binary are marked ``integration``.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest
from loguru import logger

from shellkit.errors import ExternalToolError
from shellkit.settings import _get_settings_cached
from shellkit.store.local import LocalWorkspaceStore


@dataclass
class Call:
    argv: list[str]
    cwd: str | None
    input: str | None


class FakeRunner:
    """Stand-in for ``run_command``."""

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self._results: dict[tuple[str, ...], tuple[int, str, str]] = {}

    def set(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self._results[prefix] = (returncode, stdout, stderr)

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: str | Path | None = None,
        input: str | None = None,  # noqa: A002
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        cmd = [str(a) for a in argv]
        self.calls.append(Call(cmd, str(cwd) if cwd is not None else None, input))

        returncode, stdout, stderr = 0, "", ""
        for prefix in sorted(self._results, key=len, reverse=True):
            if tuple(cmd[: len(prefix)]) == prefix:
                returncode, stdout, stderr = self._results[prefix]
                break

        if check and returncode != 0:
            raise ExternalToolError("fake failure", command=cmd, returncode=returncode, stderr=stderr)
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    def commands(self, *prefix: str) -> list[Call]:
        """Recorded calls whose argv starts with ``prefix``."""
        return [c for c in self.calls if tuple(c.argv[: len(prefix)]) == prefix]


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def store(tmp_path: Path) -> LocalWorkspaceStore:
    return LocalWorkspaceStore(tmp_path / "config")


@pytest.fixture
def config_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point SHELLKIT_CONFIG_ROOT at a temp dir and invalidate the settings cache."""
    root = tmp_path / "config"
    monkeypatch.setenv("SHELLKIT_CONFIG_ROOT", str(root))
    _get_settings_cached.cache_clear()
    yield root
    _get_settings_cached.cache_clear()
    # The CLI points loguru at CliRunner's stderr, which is closed afterwards.
    logger.remove()


@pytest.fixture
def git_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate git from the user's config and give it a committer identity."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "Test")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "test@example.com")
