"""Local filesystem workspace store.

Stores each workspace as a pretty-printed JSON document under an explicit
configuration root::

    {config_root}/workspaces/{name}.json

Writes are atomic: data is written to a temporary file in the same
directory, the current document is copied to ``{name}.json.backup``, and
only then is the temporary file renamed over the document.  The rename is
the only destructive step, so the previous generation is always
recoverable from the backup.

Directory keys keep insertion order; multi-directory operations iterate
them in that order.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from shellkit.errors import NotFoundError, StoreError
from shellkit.models.workspace import DEFAULT_EXCLUDES, DEFAULT_INCLUDES, DirectoryFilter, Workspace

DOCUMENT_SUFFIX = ".json"
BACKUP_SUFFIX = ".backup"


class LocalWorkspaceStore:
    """Local filesystem implementation of the WorkspaceStore protocol.

    Layout::

        {config_root}/workspaces/{name}.json
    """

    def __init__(self, config_root: str | Path) -> None:
        self._base = Path(config_root) / "workspaces"

    # -- Paths -----------------------------------------------------------------

    def document_path(self, name: str) -> Path:
        candidate = Path(name)
        if candidate.is_absolute() and candidate.suffix == DOCUMENT_SUFFIX:
            return candidate
        return self._base / f"{name}{DOCUMENT_SUFFIX}"

    def backup_path(self, name: str) -> Path:
        path = self.document_path(name)
        return path.with_name(path.name + BACKUP_SUFFIX)

    # -- Lifecycle -------------------------------------------------------------

    def create(self, name: str, root: str | Path | None = None, tagfile_name: str = "TAGS") -> Workspace | None:
        root_path = Path(root or Path.cwd()).expanduser().resolve()
        try:
            root_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"cannot create workspace root {root_path}: {exc.strerror or exc}") from exc

        path = self.document_path(name)
        if path.exists():
            logger.info("Workspace {} already exists at {}", name, path)
            try:
                return self.load(name)
            except NotFoundError:
                logger.warning("Workspace {} document is malformed, left untouched: {}", name, path)
                return None

        workspace = Workspace(
            id=_workspace_id(name),
            root=str(root_path),
            tagfile=str(root_path / tagfile_name),
        )
        _atomic_write(path, _dump(workspace))
        logger.info("Created workspace {} (root={})", name, root_path)
        return workspace

    def delete(self, name: str) -> None:
        path = self.document_path(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StoreError(f"cannot delete workspace {name!r}: {exc.strerror or exc}") from exc
        logger.info("Deleted workspace {}", name)

    # -- Read ------------------------------------------------------------------

    def verify_exists(self, name: str) -> None:
        if not self.document_path(name).is_file():
            raise NotFoundError(f"workspace {name!r} does not exist")

    def load(self, name: str) -> Workspace:
        path = self.document_path(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise NotFoundError(f"workspace {name!r} does not exist") from None
        try:
            return Workspace.model_validate_json(raw)
        except ValidationError as exc:
            raise NotFoundError(f"workspace {name!r} is malformed: {path}") from exc

    def list_workspaces(self) -> list[str]:
        if not self._base.is_dir():
            return []
        return sorted(p.stem for p in self._base.glob(f"*{DOCUMENT_SUFFIX}") if p.is_file())

    def get_root(self, name: str) -> str:
        return self.load(name).root

    def get_tagfile(self, name: str) -> str:
        return self.load(name).tagfile

    def list_directories(
        self, name: str, *, structured: bool = False
    ) -> list[str] | dict[str, DirectoryFilter]:
        dirs = self.load(name).dirs
        if structured:
            return dict(dirs)
        return list(dirs)

    def get_directory(self, name: str, dir_path: str | Path) -> DirectoryFilter:
        key = _absolute(dir_path)
        dirs = self.load(name).dirs
        if key not in dirs:
            raise NotFoundError(f"directory {key!r} is not part of workspace {name!r}")
        return dirs[key]

    # -- Write -----------------------------------------------------------------

    def add_directory(
        self,
        name: str,
        dir_path: str | Path,
        includes: str = DEFAULT_INCLUDES,
        excludes: str = DEFAULT_EXCLUDES,
    ) -> DirectoryFilter:
        key = _absolute(dir_path)
        self.verify_exists(name)

        workspace = self.load(name)
        entry = DirectoryFilter(includes=includes, excludes=excludes)
        workspace.dirs[key] = entry

        _atomic_write(self.document_path(name), _dump(workspace), backup=self.backup_path(name))
        logger.info("Workspace {}: set {} (includes={!r}, excludes={!r})", name, key, includes, excludes)
        return entry


# -- Helpers -------------------------------------------------------------------


def _workspace_id(name: str) -> str:
    candidate = Path(name)
    if candidate.is_absolute() and candidate.suffix == DOCUMENT_SUFFIX:
        return candidate.stem
    return name


def _absolute(path: str | Path) -> str:
    return str(Path(path).expanduser().resolve())


def _dump(workspace: Workspace) -> str:
    # Trailing newline keeps the document friendly to diff and cat.
    return workspace.model_dump_json(indent=2) + "\n"


def _atomic_write(path: Path, data: str, backup: Path | None = None) -> None:
    """Write data atomically: temp file, optional backup copy, then rename.

    The temp file is created in the same directory so ``os.replace`` is
    atomic on POSIX.  When ``backup`` is given and the document exists, it
    is copied there after the temp file is complete and before the rename.
    Filesystem failures surface as ``StoreError``; the document is left as
    it was.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    except OSError as exc:
        raise StoreError(f"cannot write {path}: {exc.strerror or exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        if backup is not None and path.exists():
            shutil.copyfile(path, backup)
        os.replace(tmp_path, path)
    except BaseException as exc:
        # Clean up temp file on any failure.
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        if isinstance(exc, OSError):
            raise StoreError(f"cannot write {path}: {exc.strerror or exc}") from exc
        raise
