"""Repository synchronisation: fetch and hard-reset to the tracking branch.

A repository without an upstream is skipped, not treated as an error.
Fetch or reset failures raise ``FatalSyncError`` and stop the caller.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from shellkit.errors import ExternalToolError, FatalSyncError
from shellkit.tools.runner import Runner, run_command


class RepositorySyncer:
    """Bring local repositories in line with their upstream branch."""

    def __init__(self, git_bin: str = "git", runner: Runner = run_command) -> None:
        self._git = git_bin
        self._run = runner

    def _cmd(self, *args: str) -> list[str]:
        return [self._git, *args]

    # -- Queries ---------------------------------------------------------------

    def tracking_ref(self, repo_path: str | Path) -> str | None:
        """Upstream ref of the current branch (``origin/main``), or None."""
        result = self._run(
            self._cmd("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"),
            cwd=repo_path,
            check=False,
        )
        if result.returncode != 0:
            return None
        ref = result.stdout.strip()
        return ref or None

    def has_uncommitted_changes(self, repo_path: str | Path) -> bool:
        """True if the working tree or index differs from HEAD."""
        result = self._run(self._cmd("status", "--porcelain", "--untracked-files=no"), cwd=repo_path)
        return any(line.strip() for line in result.stdout.splitlines())

    # -- Update ----------------------------------------------------------------

    def update_repo(self, repo_path: str | Path, *, stash_uncommitted: bool = True) -> str | None:
        """Fetch all remotes and hard-reset to the tracking ref.

        Returns the tracking ref, or None when the branch tracks nothing
        (nothing is fetched or reset in that case).
        """
        upstream = self.tracking_ref(repo_path)
        if upstream is None:
            logger.info("{}: no tracking ref, skipping", repo_path)
            return None

        if stash_uncommitted and self.has_uncommitted_changes(repo_path):
            logger.info("{}: stashing uncommitted changes", repo_path)
            self._run(self._cmd("stash", "push", "--quiet"), cwd=repo_path)

        try:
            self._run(self._cmd("fetch", "--all", "--quiet"), cwd=repo_path)
        except ExternalToolError as exc:
            msg = f"{repo_path}: fetch failed"
            raise FatalSyncError(msg, command=exc.command, returncode=exc.returncode, stderr=exc.stderr) from exc

        try:
            self._run(self._cmd("reset", "--hard", "--quiet", upstream), cwd=repo_path)
        except ExternalToolError as exc:
            msg = f"{repo_path}: reset to {upstream} failed"
            raise FatalSyncError(msg, command=exc.command, returncode=exc.returncode, stderr=exc.stderr) from exc

        logger.info("{}: reset to {}", repo_path, upstream)
        return upstream
