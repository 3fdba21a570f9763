import re
from pathlib import Path

import click
from loguru import logger

from shellkit.errors import ShellkitError


class _ShellkitGroup(click.Group):
    """Top-level group that turns ``ShellkitError`` into a logged exit code."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except ShellkitError as exc:
            logger.error("{}", exc)
            ctx.exit(exc.exit_code)


def _regex(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return value
    try:
        re.compile(value)
    except re.error as exc:
        raise click.BadParameter(f"invalid regex: {exc}") from None
    return value


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def _store():
    from shellkit.settings import get_settings
    from shellkit.store import LocalWorkspaceStore

    return LocalWorkspaceStore(get_settings().config_root)


def _syncer():
    from shellkit.settings import get_settings
    from shellkit.tools.git import RepositorySyncer

    return RepositorySyncer(git_bin=get_settings().git_bin)


def _indexer():
    from shellkit.settings import get_settings
    from shellkit.tools.tags import TagIndexer

    settings = get_settings()
    return TagIndexer(ctags_bin=settings.ctags_bin, ctags_args=settings.ctags_args, git_bin=settings.git_bin)


def _orchestrator():
    from shellkit.managers import WorkspaceOrchestrator

    return WorkspaceOrchestrator(_store(), _indexer(), _syncer())


@click.group(cls=_ShellkitGroup)
@click.option("--log-level", default=None, help="Log level (default: from SHELLKIT_LOG_LEVEL or WARNING).")
def main(log_level: str | None) -> None:
    """shellkit - process signaling, PATH helpers and source workspaces."""
    from shellkit.log import setup_logging
    from shellkit.settings import get_settings

    setup_logging(log_level or get_settings().log_level)


# ---------------------------------------------------------------------------
# Processes and PATH
# ---------------------------------------------------------------------------


@main.command()
@click.argument("pattern", callback=_regex)
@click.option("-s", "--signal", "sig", default="15", show_default=True, help="Signal number or name.")
@click.option("-x", "--exclude", default="$^", callback=_regex, help="Skip commands matching this regex.")
def sig(pattern: str, sig: str, exclude: str) -> None:
    """Send a signal to every process whose command line matches PATTERN."""
    from shellkit.tools.process import parse_signal, signal_processes

    try:
        parse_signal(sig)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--signal") from None

    for pid in signal_processes(pattern, sig, exclude):
        click.echo(pid)


@main.group()
def path() -> None:
    """Inspect PATH."""


@path.command("all")
@click.argument("cmd")
def path_all(cmd: str) -> None:
    """List every executable CMD on PATH, in order."""
    from shellkit.tools.path import all_in_path

    for entry in all_in_path(cmd):
        click.echo(entry)


@path.command("next")
@click.argument("cmd")
@click.argument("current_dir")
def path_next(cmd: str, current_dir: str) -> None:
    """Print the CMD on PATH that comes after CURRENT_DIR/CMD."""
    from shellkit.tools.path import next_in_path

    click.echo(next_in_path(cmd, current_dir))


# ---------------------------------------------------------------------------
# Version control and tags
# ---------------------------------------------------------------------------


@main.group()
def git() -> None:
    """Repository helpers."""


@git.command("update")
@click.argument("repo", type=click.Path(exists=True, file_okay=False))
@click.option("--no-stash", is_flag=True, default=False, help="Do not stash uncommitted changes first.")
def git_update(repo: str, no_stash: bool) -> None:
    """Fetch all remotes and hard-reset REPO to its tracking branch."""
    upstream = _syncer().update_repo(repo, stash_uncommitted=not no_stash)
    if upstream is None:
        click.echo(f"{repo}: no tracking branch, skipped")
    else:
        click.echo(f"{repo}: reset to {upstream}")


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--tagfile", default=None, help="Tag file to append to (default: DIRECTORY/TAGS).")
@click.option("--includes", default=".*", callback=_regex, help="Tag only paths matching this regex.")
@click.option("--excludes", default="^$", callback=_regex, help="Skip paths matching this regex.")
@click.option("--all-files", is_flag=True, default=False, help="Tag all files, not only git-tracked ones.")
def tags(directory: str, tagfile: str | None, includes: str, excludes: str, all_files: bool) -> None:
    """Append tags for files under DIRECTORY to a tag file."""
    directory = str(Path(directory).resolve())
    files = _indexer().generate(directory, tagfile, include=includes, exclude=excludes, tracked_only=not all_files)
    click.echo(f"Tagged {len(files)} files.")


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@main.group()
def ws() -> None:
    """Manage workspaces: directory groups with file filters."""


@ws.command("create")
@click.argument("name")
@click.option("--root", default=None, help="Workspace root (default: current directory).")
@click.option("--tagfile-name", default=None, help="Tag file name under the root (default: TAGS).")
def ws_create(name: str, root: str | None, tagfile_name: str | None) -> None:
    """Create workspace NAME.  Does nothing if it already exists."""
    from shellkit.settings import get_settings

    workspace = _store().create(name, root, tagfile_name or get_settings().tagfile_name)
    if workspace is None:
        click.echo(f"Workspace {name}: existing document is malformed, left unchanged")
        return
    click.echo(f"Workspace {name}: root {workspace.root}")


@ws.command("delete")
@click.argument("name")
def ws_delete(name: str) -> None:
    """Delete workspace NAME."""
    _store().delete(name)


@ws.command("list")
def ws_list() -> None:
    """List all workspaces."""
    for name in _store().list_workspaces():
        click.echo(name)


@ws.command("show")
@click.argument("name")
def ws_show(name: str) -> None:
    """Print the document of workspace NAME."""
    click.echo(_store().load(name).model_dump_json(indent=2))


@ws.command("root")
@click.argument("name")
def ws_root(name: str) -> None:
    """Print the root directory of workspace NAME."""
    click.echo(_store().get_root(name))


@ws.command("tagfile")
@click.argument("name")
def ws_tagfile(name: str) -> None:
    """Print the tag file path of workspace NAME."""
    click.echo(_store().get_tagfile(name))


@ws.command("dirs")
@click.argument("name")
@click.option("--structured", is_flag=True, default=False, help="Print directories with their filters as JSON.")
def ws_dirs(name: str, structured: bool) -> None:
    """List the directories of workspace NAME."""
    import json

    dirs = _store().list_directories(name, structured=structured)
    if structured:
        click.echo(json.dumps({d: f.model_dump() for d, f in dirs.items()}, indent=2))
        return
    for directory in dirs:
        click.echo(directory)


@ws.command("add")
@click.argument("name")
@click.argument("directory", type=click.Path(file_okay=False))
@click.option("--includes", default=".*", callback=_regex, help="Tag only paths matching this regex.")
@click.option("--excludes", default="^$", callback=_regex, help="Skip paths matching this regex.")
def ws_add(name: str, directory: str, includes: str, excludes: str) -> None:
    """Add DIRECTORY to workspace NAME, or replace its filters."""
    _store().add_directory(name, directory, includes, excludes)


@ws.command("tags")
@click.argument("name")
def ws_tags(name: str) -> None:
    """Regenerate the tag file of workspace NAME."""
    files = _orchestrator().generate_tags(name)
    click.echo(f"Tagged {len(files)} files.")


@ws.command("update")
@click.argument("name")
@click.argument("dirs", nargs=-1)
def ws_update(name: str, dirs: tuple[str, ...]) -> None:
    """Sync the repositories of workspace NAME (or only DIRS) with upstream."""
    for directory, upstream in _orchestrator().update_version_control(name, dirs).items():
        if upstream is None:
            click.echo(f"{directory}: no tracking branch, skipped")
        else:
            click.echo(f"{directory}: reset to {upstream}")


if __name__ == "__main__":
    main()
