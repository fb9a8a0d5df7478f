"""Directory bookmarks stored as a directory of symlinks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import BookmarkError

SHELL_FUNCTION = """\
bcd() {
    local target
    target="$(bm path "$1")" && cd "$target"
}
"""


@dataclass(frozen=True)
class Bookmark:
    """A named directory.

    Attributes:
        name: Bookmark name, the symlink's file name.
        target: Directory the symlink points to.
        exists: Whether `target` is currently an existing directory.
    """

    name: str
    target: Path
    exists: bool


def validate_name(name: str) -> None:
    """Reject names that cannot be stored as a plain symlink in the store.

    Raises:
        BookmarkError: If the name is empty, hidden, or contains a path
            separator or NUL byte.
    """
    if not name:
        raise BookmarkError("Bookmark name must not be empty")
    if "/" in name or "\0" in name or (os.altsep and os.altsep in name):
        raise BookmarkError(f"Invalid bookmark name {name!r}: must not contain path separators")
    if name.startswith("."):
        raise BookmarkError(f"Invalid bookmark name {name!r}: must not start with '.'")


def _is_valid_name(name: str) -> bool:
    try:
        validate_name(name)
    except BookmarkError:
        return False
    return True


class BookmarkStore:
    """Bookmarks kept as symlinks inside `root`.

    Each symlink's name is the bookmark name and its target the bookmarked
    directory. Entries of `root` that are not symlinks are ignored and never
    modified.

    Args:
        root: Store directory. Created on the first `add`.

    Examples:
        store = BookmarkStore(Path("~/.bookmarks").expanduser())
        store.add("src", Path.cwd())
        store.resolve("src")
    """

    def __init__(self, root: Path):
        self.root = root

    def _link(self, name: str) -> Path:
        validate_name(name)
        return self.root / name

    def _existing_link(self, name: str) -> Path:
        link = self._link(name)
        if not link.is_symlink():
            raise BookmarkError(f"No such bookmark: {name}")
        return link

    def add(self, name: str, target: Path, force: bool = False) -> Bookmark:
        """Bookmark a directory.

        Args:
            name: Bookmark name.
            target: Directory to bookmark. Stored as an absolute path.
            force: Replace an existing bookmark with the same name.

        Returns:
            Bookmark: The new bookmark.

        Raises:
            BookmarkError: If the name is invalid or taken, the target is not
                a directory, or the store cannot be written.
        """
        link = self._link(name)
        target = target.expanduser().absolute()
        if not target.is_dir():
            raise BookmarkError(f"{target} is not a directory")

        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise BookmarkError(f"Cannot create bookmark store {self.root}: {error}") from error

        if link.is_symlink():
            if not force:
                raise BookmarkError(f"Bookmark {name} already exists (use --force to replace it)")
            link.unlink()
        elif link.exists():
            raise BookmarkError(f"{link} exists and is not a bookmark")

        try:
            link.symlink_to(target, target_is_directory=True)
        except OSError as error:
            raise BookmarkError(f"Cannot create bookmark {name}: {error}") from error
        return Bookmark(name=name, target=target, exists=True)

    def remove(self, name: str) -> None:
        """Delete a bookmark. The bookmarked directory is left untouched."""
        link = self._existing_link(name)
        try:
            link.unlink()
        except OSError as error:
            raise BookmarkError(f"Cannot remove bookmark {name}: {error}") from error

    def rename(self, old: str, new: str) -> Bookmark:
        """Rename a bookmark, refusing to overwrite an existing entry."""
        link = self._existing_link(old)
        new_link = self._link(new)
        if new_link.is_symlink() or new_link.exists():
            raise BookmarkError(f"Bookmark {new} already exists")
        try:
            link.rename(new_link)
        except OSError as error:
            raise BookmarkError(f"Cannot rename bookmark {old}: {error}") from error
        return self._describe(new_link)

    def resolve(self, name: str) -> Path:
        """Return the directory a bookmark points to.

        Raises:
            BookmarkError: If the bookmark is missing or its target no longer
                exists.
        """
        bookmark = self._describe(self._existing_link(name))
        if not bookmark.exists:
            raise BookmarkError(f"Bookmark {name} points to a missing directory: {bookmark.target}")
        return bookmark.target

    def list(self) -> list[Bookmark]:
        """Return every bookmark, sorted by name.

        Symlinks whose names are not valid bookmark names are not listed.
        """
        if not self.root.is_dir():
            return []
        links = [
            entry
            for entry in self.root.iterdir()
            if entry.is_symlink() and _is_valid_name(entry.name)
        ]
        return [self._describe(link) for link in sorted(links, key=lambda link: link.name)]

    def prune(self) -> list[str]:
        """Delete bookmarks whose target is gone.

        Returns:
            list[str]: Names of the removed bookmarks, sorted.
        """
        pruned = []
        for bookmark in self.list():
            if not bookmark.exists:
                self.remove(bookmark.name)
                pruned.append(bookmark.name)
        return pruned

    def _describe(self, link: Path) -> Bookmark:
        target = Path(os.readlink(link))
        if not target.is_absolute():
            target = self.root / target
        return Bookmark(name=link.name, target=target, exists=target.is_dir())
