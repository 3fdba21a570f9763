"""Batch operations over every directory in a workspace.

Both workflows are fail-fast: the first error propagates and the
remaining directories are left untouched.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from shellkit.store.base import WorkspaceStore
from shellkit.tools.git import RepositorySyncer
from shellkit.tools.tags import TagIndexer

BACKUP_SUFFIX = ".backup"


class WorkspaceOrchestrator:
    """Runs the tag indexer or the repository syncer across a workspace."""

    def __init__(self, store: WorkspaceStore, indexer: TagIndexer, syncer: RepositorySyncer) -> None:
        self.store = store
        self.indexer = indexer
        self.syncer = syncer

    def generate_tags(self, name: str) -> list[str]:
        """Rebuild the workspace tag file from scratch.

        The existing tag file is moved to ``<tagfile>.backup`` first so the
        indexer's appends start from an empty file.  Returns every file
        handed to ctags.
        """
        dirs = self.store.list_directories(name, structured=True)
        tagfile = Path(self.store.get_tagfile(name))

        if tagfile.exists():
            backup = tagfile.with_name(tagfile.name + BACKUP_SUFFIX)
            os.replace(tagfile, backup)
            logger.debug("Moved {} to {}", tagfile, backup)

        tagged: list[str] = []
        for directory, entry in dirs.items():
            tagged.extend(
                self.indexer.generate(directory, tagfile, include=entry.includes, exclude=entry.excludes)
            )
        logger.info("Workspace {}: tagged {} files from {} directories", name, len(tagged), len(dirs))
        return tagged

    def update_version_control(self, name: str, explicit_dirs: Sequence[str | Path] = ()) -> dict[str, str | None]:
        """Sync each repository with its upstream, in order.

        Uses ``explicit_dirs`` when given, otherwise all workspace
        directories.  Returns directory -> tracking ref (None if skipped).
        """
        if explicit_dirs:
            dirs = [str(d) for d in explicit_dirs]
        else:
            dirs = self.store.list_directories(name)

        results: dict[str, str | None] = {}
        for directory in dirs:
            results[directory] = self.syncer.update_repo(directory)
        return results
