"""Tests for PATH inspection."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from shellkit.errors import NotFoundError
from shellkit.tools.path import all_in_path, next_in_path


def _bin(base: Path, name: str, tool: str = "toolX", *, executable: bool = True) -> Path:
    directory = base / name / "bin"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / tool
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755 if executable else 0o644)
    return directory


def _path(*dirs: Path) -> str:
    return os.pathsep.join(str(d) for d in dirs)


def test_all_in_path_skips_duplicates(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a")
    b = tmp_path / "b" / "bin"
    b.mkdir(parents=True)

    assert list(all_in_path("toolX", _path(a, b, a))) == [str(a / "toolX")]


def test_all_in_path_keeps_path_order(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a")
    b = _bin(tmp_path, "b")

    assert list(all_in_path("toolX", _path(b, a))) == [str(b / "toolX"), str(a / "toolX")]


def test_all_in_path_ignores_non_executables(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a", executable=False)
    b = _bin(tmp_path, "b")
    (tmp_path / "c" / "bin" / "toolX").mkdir(parents=True)

    assert list(all_in_path("toolX", _path(a, b, tmp_path / "c" / "bin"))) == [str(b / "toolX")]


def test_all_in_path_is_restartable(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a")
    search = _path(a)

    assert list(all_in_path("toolX", search)) == list(all_in_path("toolX", search))


def test_all_in_path_defaults_to_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    a = _bin(tmp_path, "a")
    monkeypatch.setenv("PATH", _path(a))

    assert list(all_in_path("toolX")) == [str(a / "toolX")]


def test_all_in_path_no_match(tmp_path: Path) -> None:
    assert list(all_in_path("missing-tool", _path(tmp_path))) == []


def test_next_in_path(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a")
    b = _bin(tmp_path, "b")

    assert next_in_path("toolX", str(a), _path(a, b)) == str(b / "toolX")


def test_next_in_path_current_not_in_path(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a")
    b = _bin(tmp_path, "b")

    with pytest.raises(NotFoundError):
        next_in_path("toolX", str(a), _path(b))


def test_next_in_path_current_is_last(tmp_path: Path) -> None:
    a = _bin(tmp_path, "a")
    b = _bin(tmp_path, "b")

    with pytest.raises(NotFoundError):
        next_in_path("toolX", str(b), _path(a, b))
