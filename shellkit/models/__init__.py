"""Data models for shellkit."""

from shellkit.models.workspace import DEFAULT_EXCLUDES, DEFAULT_INCLUDES, DirectoryFilter, Workspace

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_INCLUDES",
    "DirectoryFilter",
    "Workspace",
]
