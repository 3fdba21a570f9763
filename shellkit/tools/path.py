"""PATH inspection: find every executable named ``cmd`` along PATH."""

from __future__ import annotations

import os
from collections.abc import Iterator

from shellkit.errors import NotFoundError


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def all_in_path(cmd: str, path: str | None = None) -> Iterator[str]:
    """Yield ``entry/cmd`` for each PATH entry holding an executable ``cmd``.

    Entries come out in PATH order; an absolute path seen twice is yielded
    once.  ``path`` defaults to ``$PATH``.  Call again to restart.
    """
    search = os.environ.get("PATH", "") if path is None else path
    seen: set[str] = set()
    for entry in search.split(os.pathsep):
        if not entry:
            continue
        candidate = os.path.abspath(os.path.join(entry, cmd))
        if candidate in seen or not _is_executable(candidate):
            continue
        seen.add(candidate)
        yield candidate


def next_in_path(cmd: str, current_dir: str, path: str | None = None) -> str:
    """Return the PATH entry for ``cmd`` that follows ``current_dir/cmd``.

    Useful for wrapper scripts that shadow a command and need to call the
    real one.  Raises ``NotFoundError`` if ``current_dir/cmd`` is not on
    PATH or is the last match.
    """
    current = os.path.abspath(os.path.join(current_dir, cmd))
    found = False
    for entry in all_in_path(cmd, path):
        if found:
            return entry
        if entry == current:
            found = True
    if found:
        raise NotFoundError(f"no {cmd} in PATH after {current}")
    raise NotFoundError(f"{current} is not in PATH")
