"""Tag index generation with ctags.

Files under a directory are enumerated (git-tracked or all), filtered by
an include/exclude regex pair and piped to ctags, which appends to the
tag file.  The tag file is never truncated here; see
``WorkspaceOrchestrator.generate_tags`` for full regeneration.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from loguru import logger

from shellkit.models.workspace import DEFAULT_EXCLUDES, DEFAULT_INCLUDES
from shellkit.settings import DEFAULT_CTAGS_ARGS
from shellkit.tools.runner import Runner, run_command


def select_files(paths: Iterable[str], include: str = DEFAULT_INCLUDES, exclude: str = DEFAULT_EXCLUDES) -> list[str]:
    """Keep paths that contain a match for ``include`` and none for ``exclude``."""
    include_re = re.compile(include)
    exclude_re = re.compile(exclude)
    return [p for p in paths if include_re.search(p) and not exclude_re.search(p)]


class TagIndexer:
    """Feeds filtered file lists to ctags in append mode."""

    def __init__(
        self,
        ctags_bin: str = "ctags",
        ctags_args: Sequence[str] = DEFAULT_CTAGS_ARGS,
        git_bin: str = "git",
        runner: Runner = run_command,
    ) -> None:
        self._ctags = ctags_bin
        self._ctags_args = list(ctags_args)
        self._git = git_bin
        self._run = runner

    def list_files(self, directory: str | Path, *, tracked_only: bool = True) -> list[str]:
        """Paths relative to ``directory``: git-tracked ones, or every regular file."""
        if tracked_only:
            # -z: NUL-separated, unquoted names (non-ASCII paths survive core.quotePath).
            result = self._run([self._git, "ls-files", "-z"], cwd=directory)
            return [name for name in result.stdout.split("\0") if name]

        base = Path(directory)
        return sorted(str(p.relative_to(base)) for p in base.rglob("*") if p.is_file())

    def generate(
        self,
        directory: str | Path,
        tagfile: str | Path | None = None,
        include: str = DEFAULT_INCLUDES,
        exclude: str = DEFAULT_EXCLUDES,
        *,
        tracked_only: bool = True,
    ) -> list[str]:
        """Append tags for the selected files under ``directory`` to ``tagfile``.

        Returns the file paths handed to ctags.
        """
        directory = str(directory)
        if tagfile is None:
            tagfile = Path(directory) / "TAGS"

        selected = select_files(self.list_files(directory, tracked_only=tracked_only), include, exclude)
        files = [f"{directory}/{rel}" for rel in selected]
        if not files:
            logger.info("{}: no files selected, nothing to tag", directory)
            return files

        logger.info("{}: tagging {} files into {}", directory, len(files), tagfile)
        self._run(
            [self._ctags, *self._ctags_args, "-L", "-", "-f", str(tagfile)],
            input="\n".join(files) + "\n",
        )
        return files
