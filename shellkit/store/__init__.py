"""Workspace store implementations."""

from shellkit.store.base import WorkspaceStore
from shellkit.store.local import LocalWorkspaceStore

__all__ = ["LocalWorkspaceStore", "WorkspaceStore"]
