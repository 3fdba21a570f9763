"""Subprocess helper shared by the git and ctags wrappers.

Commands are always argv lists (no ``shell=True``), run to completion
with captured text output.  There are no timeouts: a hung tool hangs the
caller.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from loguru import logger

from shellkit.errors import ExternalToolError, NotFoundError


class Runner(Protocol):
    """Callable signature of :func:`run_command`, for injecting fakes."""

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: str | Path | None = None,
        input: str | None = None,  # noqa: A002
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]: ...


def run_command(
    argv: Sequence[str],
    *,
    cwd: str | Path | None = None,
    input: str | None = None,  # noqa: A002
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run ``argv`` and return the completed process.

    Raises ``NotFoundError`` if ``cwd`` is not a directory, and
    ``ExternalToolError`` if the executable cannot be started or exits
    non-zero while ``check`` is true.
    """
    cmd = [str(part) for part in argv]
    if cwd is not None and not Path(cwd).is_dir():
        raise NotFoundError(f"directory {cwd} does not exist")
    logger.debug("Running {} (cwd={})", " ".join(cmd), cwd)
    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            cwd=cwd,
            input=input,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        msg = f"cannot run {cmd[0]}: {exc.strerror or exc}"
        raise ExternalToolError(msg, command=cmd) from exc

    if check and result.returncode != 0:
        msg = f"{' '.join(cmd)} exited with status {result.returncode}"
        raise ExternalToolError(msg, command=cmd, returncode=result.returncode, stderr=result.stderr)
    return result
