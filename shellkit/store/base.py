"""Workspace store interface.

The store owns the on-disk representation of workspaces: one JSON
document per workspace name, rewritten whole on every mutation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from shellkit.models.workspace import DirectoryFilter, Workspace


@runtime_checkable
class WorkspaceStore(Protocol):
    """Protocol for reading and mutating workspace documents.

    Storage layout (keyed by workspace name):
        {config_root}/workspaces/{name}.json
        {config_root}/workspaces/{name}.json.backup
    """

    def document_path(self, name: str) -> Path:
        """Physical document path for ``name``.  Document paths pass through."""
        ...

    def create(self, name: str, root: str | Path | None = None, tagfile_name: str = "TAGS") -> Workspace | None:
        """Create a workspace.  No-op if it already exists.

        Returns the stored workspace, or None when an existing document
        cannot be parsed (it is left untouched).
        """
        ...

    def delete(self, name: str) -> None:
        """Delete a workspace.  No-op if not found."""
        ...

    def verify_exists(self, name: str) -> None:
        """Raise ``NotFoundError`` if the workspace does not exist."""
        ...

    def load(self, name: str) -> Workspace:
        """Read a workspace.  Raises ``NotFoundError`` if absent or malformed."""
        ...

    def list_workspaces(self) -> list[str]:
        """Names of all stored workspaces."""
        ...

    def get_root(self, name: str) -> str: ...

    def get_tagfile(self, name: str) -> str: ...

    def list_directories(
        self, name: str, *, structured: bool = False
    ) -> list[str] | dict[str, DirectoryFilter]:
        """Directory keys in document order, or the full filter mapping."""
        ...

    def get_directory(self, name: str, dir_path: str | Path) -> DirectoryFilter: ...

    def add_directory(
        self,
        name: str,
        dir_path: str | Path,
        includes: str = ...,
        excludes: str = ...,
    ) -> DirectoryFilter:
        """Set the filter for ``dir_path``, backing up the previous document."""
        ...
