"""
Command-line entry points.

- `markblocks` prints the content of marker-delimited blocks.
- `nocomment` prints files with their comments removed.
- `bm` manages directory bookmarks.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from .bookmarks import SHELL_FUNCTION, BookmarkStore
from .comments import COMMENT_STYLES, DebugLog, select_style, strip_comments
from .config import ConfigError, apply_overrides, build_config, validate_config
from .constants import STDIN_NAME
from .exceptions import BookmarkError, SourceError
from .extractor import Extractor
from .filesystem import get_bookmark_dir, get_max_line_length, safe_read

__all__ = ["bm", "cli", "nocomment"]

INTERRUPTED_EXIT_CODE = 130


@click.command()
@click.version_option(package_name="marktools")
@click.option("-n", "--line-numbers", is_flag=True, help="Prefix lines with their line number")
@click.option("-f", "--filenames", is_flag=True, help="Print a header before each file's blocks")
@click.option("-q", "--quiet", is_flag=True, help="Do not print diagnostics")
@click.option(
    "-l", "--list", "list_files", is_flag=True, help="Only print names of files containing blocks"
)
@click.option("-s", "--stats", is_flag=True, help="Print line and error counts on stderr")
@click.option("--max-line-length", type=int, help="Maximum line length (-1 for no limit)")
@click.option("--tab-width", type=int, help="Tab stop interval used with --line-numbers")
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
def cli(
    paths: tuple[Path, ...],
    line_numbers: bool = False,
    filenames: bool = False,
    quiet: bool = False,
    list_files: bool = False,
    stats: bool = False,
    max_line_length: int | None = None,
    tab_width: int | None = None,
):
    """
    Print the lines found between `mark begin` and `mark end` markers.

    Markers are comment lines such as `# -- mark begin --`. Blocks may nest.
    Directories are searched recursively; standard input is read when no path
    is given or a path is `-`.

    Args:
        paths: Files and directories to scan.
        line_numbers: Prefix each line with its line number.
        filenames: Print a header before the first block of each file.
        quiet: Count diagnostics without printing them.
        list_files: Print only the names of files containing a block.
        stats: Print a summary of scanned and printed lines.
        max_line_length: Override for the maximum line length.
        tab_width: Override for the tab stop interval.

    Raises:
        click.BadParameter: If configuration values are invalid.
        click.ClickException: If an environment override is invalid.
        SystemExit: With status 1 when any error was reported, 130 when
            interrupted.

    Examples:
        markblocks -n -f src/
    """
    try:
        config = build_config(
            Path.cwd(),
            print_line_numbers=line_numbers or None,
            print_filenames=filenames or None,
            suppress_errors=quiet or None,
            print_content=False if list_files else None,
            print_stats=stats or None,
            tab_width=tab_width,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        if max_line_length is None:
            max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        config = apply_overrides(config, max_line_length=max_line_length)
        validate_config(config)
    except ConfigError as error:
        raise click.BadParameter(str(error), param_hint="'--max-line-length'") from error

    extractor = Extractor(config)
    try:
        status = extractor.run(paths)
    except KeyboardInterrupt:
        if extractor.status.errors:
            click.echo(f"Interrupted after {extractor.status.summary()}", err=True)
        raise SystemExit(INTERRUPTED_EXIT_CODE)

    if config.print_stats:
        click.echo(status.summary(), err=True)
    elif status.errors and not config.suppress_errors:
        click.echo(f"{status.errors} error{'' if status.errors == 1 else 's'}", err=True)

    if status.errors:
        raise SystemExit(1)


@click.command()
@click.version_option(package_name="marktools")
@click.option(
    "--style",
    type=click.Choice(sorted(COMMENT_STYLES)),
    help="Comment syntax (default: chosen by file extension)",
)
@click.option("--squeeze", is_flag=True, help="Collapse runs of blank lines")
@click.option("--debug", is_flag=True, help="Report each removed comment on stderr")
@click.argument("paths", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
def nocomment(
    paths: tuple[Path, ...],
    style: str | None = None,
    squeeze: bool = False,
    debug: bool = False,
):
    """
    Print files with comments removed.

    Reads standard input when no path is given.

    Raises:
        click.ClickException: If a file cannot be read or decoded.

    Examples:
        nocomment --style c main.c
    """
    debug_log = DebugLog(enabled=debug)

    if not paths:
        for line in strip_comments(sys.stdin, select_style(style), STDIN_NAME, squeeze, debug_log):
            click.echo(line, nl=False)
        return

    for path in paths:
        try:
            with safe_read(path) as stream:
                lines = strip_comments(
                    stream, select_style(style, path), str(path), squeeze, debug_log
                )
                for line in lines:
                    click.echo(line, nl=False)
        except SourceError as error:
            raise click.ClickException(str(error)) from error
        except UnicodeDecodeError as error:
            raise click.ClickException(f"Invalid UTF-8 sequence in {path}: {error}") from error


@click.group()
@click.version_option(package_name="marktools")
@click.option(
    "--store",
    type=click.Path(file_okay=False, path_type=Path),
    help="Bookmark directory (default: $MARKTOOLS_BOOKMARK_DIR or ~/.bookmarks)",
)
@click.pass_context
def bm(ctx: click.Context, store: Path | None = None):
    """Bookmark directories and jump back to them."""
    ctx.obj = BookmarkStore(get_bookmark_dir(str(store) if store else None))


@bm.command("add")
@click.option("-f", "--force", is_flag=True, help="Replace an existing bookmark")
@click.argument("name")
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.pass_obj
def bm_add(store: BookmarkStore, name: str, directory: Path | None = None, force: bool = False):
    """Bookmark DIRECTORY (default: the current directory) as NAME."""
    try:
        bookmark = store.add(name, directory or Path.cwd(), force=force)
    except BookmarkError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"{bookmark.name} -> {bookmark.target}")


@bm.command("rm")
@click.argument("name")
@click.pass_obj
def bm_remove(store: BookmarkStore, name: str):
    """Delete the bookmark NAME."""
    try:
        store.remove(name)
    except BookmarkError as error:
        raise click.ClickException(str(error)) from error


@bm.command("rename")
@click.argument("old")
@click.argument("new")
@click.pass_obj
def bm_rename(store: BookmarkStore, old: str, new: str):
    """Rename the bookmark OLD to NEW."""
    try:
        store.rename(old, new)
    except BookmarkError as error:
        raise click.ClickException(str(error)) from error


@bm.command("path")
@click.argument("name")
@click.pass_obj
def bm_path(store: BookmarkStore, name: str):
    """Print the directory bookmarked as NAME."""
    try:
        click.echo(store.resolve(name))
    except BookmarkError as error:
        raise click.ClickException(str(error)) from error


@bm.command("list")
@click.pass_obj
def bm_list(store: BookmarkStore):
    """List bookmarks."""
    bookmarks = store.list()
    if not bookmarks:
        return
    width = max(len(bookmark.name) for bookmark in bookmarks)
    for bookmark in bookmarks:
        missing = "" if bookmark.exists else " (missing)"
        click.echo(f"{bookmark.name:<{width}}  {bookmark.target}{missing}")


@bm.command("prune")
@click.pass_obj
def bm_prune(store: BookmarkStore):
    """Delete bookmarks whose directory no longer exists."""
    try:
        pruned = store.prune()
    except BookmarkError as error:
        raise click.ClickException(str(error)) from error
    for name in pruned:
        click.echo(f"Removed {name}")


@bm.command("shell-init")
def bm_shell_init():
    """Print a `bcd` shell function that changes to a bookmarked directory.

    Add `eval "$(bm shell-init)"` to your shell startup file.
    """
    click.echo(SHELL_FUNCTION, nl=False)


if __name__ == "__main__":
    cli()
