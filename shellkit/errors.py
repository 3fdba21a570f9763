"""Error kinds raised across shellkit.

Library code raises these and never exits the process itself.  The CLI's
top-level handler maps each kind to its ``exit_code``.
"""

from __future__ import annotations

from collections.abc import Sequence


class ShellkitError(Exception):
    """Base class for all shellkit errors."""

    exit_code: int = 1


class NotFoundError(ShellkitError, LookupError):
    """A workspace, directory entry or PATH entry does not exist."""

    exit_code = 3


class ExternalToolError(ShellkitError, RuntimeError):
    """An external command failed to start, exited non-zero or produced bad output."""

    exit_code = 4

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.command = list(command) if command is not None else None
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        msg = super().__str__()
        if self.stderr:
            return f"{msg}: {self.stderr.strip()}"
        return msg


class FatalSyncError(ExternalToolError):
    """Fetching or resetting a repository failed; the whole run must stop."""

    exit_code = 5


class StoreError(ShellkitError, OSError):
    """A workspace document or root directory could not be written."""

    exit_code = 6
