"""Workspace data model.

A workspace is a named group of directories, each with its own file
filters, plus a root directory and the path of the combined tag file.
One workspace maps to one JSON document on disk.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_INCLUDES = ".*"
DEFAULT_EXCLUDES = "^$"


class DirectoryFilter(BaseModel):
    """Include/exclude regexes applied (as substring searches) to file paths."""

    includes: str = DEFAULT_INCLUDES
    excludes: str = DEFAULT_EXCLUDES


class Workspace(BaseModel):
    """Workspace document."""

    id: str
    root: str
    tagfile: str
    dirs: dict[str, DirectoryFilter] = Field(
        default_factory=dict,
        description="Absolute directory path -> filter, in insertion order",
    )
