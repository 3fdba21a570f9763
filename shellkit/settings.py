"""Configuration loaded from SHELLKIT_* environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CTAGS_ARGS = [
    "-e",
    "-a",
    "--extras=-fqr",
    "--kinds-c=-m",
    "--fields=+aiKlS",
]
"""Emacs-format output appended to the tag file, without file-scope,
qualified, reference or struct-member entries."""


class ShellkitSettings(BaseSettings):
    """shellkit settings.

    All fields are read from environment variables with the ``SHELLKIT_``
    prefix.  For example, ``SHELLKIT_CONFIG_ROOT=/tmp/sk`` maps to
    ``config_root``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHELLKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "WARNING"

    # -- Workspace storage -----------------------------------------------------
    config_root: Path = Field(default_factory=lambda: Path.home() / ".config" / "shellkit")
    """Base directory holding ``workspaces/<name>.json`` documents."""

    tagfile_name: str = "TAGS"
    """Tag file name used when a workspace is created without one."""

    # -- External tools --------------------------------------------------------
    git_bin: str = "git"
    ctags_bin: str = "ctags"
    ctags_args: list[str] = Field(default_factory=lambda: list(DEFAULT_CTAGS_ARGS))
    """Flags passed to ctags before ``-L - -f <tagfile>``."""


def get_settings() -> ShellkitSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> ShellkitSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return ShellkitSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
