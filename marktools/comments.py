"""Comment removal for source and configuration files."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import click

from .constants import STDIN_NAME

DEFAULT_STYLE = "shell"


@dataclass(frozen=True)
class CommentStyle:
    """Comment syntax of one family of languages.

    Attributes:
        name: Name used to select the style.
        line_tokens: Tokens starting a comment that runs to the end of the line.
        block: Opening and closing delimiters of block comments, if any.
        quotes: Characters delimiting string literals; comment tokens inside
            strings are kept.
        line_start_only: Line comments are only recognized as the first
            non-blank text on a line.
        word_start_only: Line comments are only recognized at the start of a
            line or after whitespace.
    """

    name: str
    line_tokens: tuple[str, ...] = ()
    block: tuple[str, str] | None = None
    quotes: tuple[str, ...] = ("'", '"')
    line_start_only: bool = False
    word_start_only: bool = False


COMMENT_STYLES: dict[str, CommentStyle] = {
    style.name: style
    for style in (
        CommentStyle("shell", line_tokens=("#",), word_start_only=True),
        CommentStyle("python", line_tokens=("#",)),
        CommentStyle("c", line_tokens=("//",), block=("/*", "*/")),
        CommentStyle("lisp", line_tokens=(";",), quotes=('"',)),
        CommentStyle("sql", line_tokens=("--",), block=("/*", "*/")),
        CommentStyle("ini", line_tokens=(";", "#"), quotes=(), line_start_only=True),
        CommentStyle("lua", line_tokens=("--",)),
        CommentStyle("html", block=("<!--", "-->"), quotes=()),
    )
}

EXTENSION_STYLES = {
    ".sh": "shell",
    ".bash": "shell",
    ".zsh": "shell",
    ".py": "python",
    ".pl": "shell",
    ".rb": "shell",
    ".yaml": "shell",
    ".yml": "shell",
    ".toml": "shell",
    ".c": "c",
    ".h": "c",
    ".cc": "c",
    ".cpp": "c",
    ".hpp": "c",
    ".java": "c",
    ".js": "c",
    ".ts": "c",
    ".go": "c",
    ".rs": "c",
    ".css": "c",
    ".el": "lisp",
    ".lisp": "lisp",
    ".scm": "lisp",
    ".clj": "lisp",
    ".asm": "lisp",
    ".sql": "sql",
    ".ini": "ini",
    ".cfg": "ini",
    ".conf": "ini",
    ".lua": "lua",
    ".html": "html",
    ".xml": "html",
    ".md": "html",
}


def select_style(name: str | None = None, filename: str | Path | None = None) -> CommentStyle:
    """Pick a comment style by name, else by file extension.

    Args:
        name: Style name from `COMMENT_STYLES`. Takes precedence.
        filename: File whose extension selects the style.

    Returns:
        CommentStyle: The selected style, ``shell`` when nothing matches.

    Raises:
        ValueError: If `name` is not a known style.

    Examples:
        select_style(filename="main.c").name  # "c"
        select_style("lisp").line_tokens  # (";",)
    """
    if name is not None:
        try:
            return COMMENT_STYLES[name]
        except KeyError as error:
            known = ", ".join(sorted(COMMENT_STYLES))
            raise ValueError(
                f"Unknown comment style {name!r} (expected one of: {known})"
            ) from error

    if filename is not None:
        style_name = EXTENSION_STYLES.get(Path(filename).suffix.lower())
        if style_name is not None:
            return COMMENT_STYLES[style_name]

    return COMMENT_STYLES[DEFAULT_STYLE]


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


@dataclass
class DebugLog:
    """Debug output for comment removal.

    Attributes:
        enabled: Whether removed comments are reported.
        warn: Receives each debug message.
    """

    enabled: bool = False
    warn: Callable[[str], None] = _echo_err

    def removed(self, source: str, line_number: int, comment: str) -> None:
        if self.enabled:
            self.warn(f"{source}:{line_number}: removed {comment!r}")


@lru_cache(maxsize=None)
def _token_pattern(style: CommentStyle) -> re.Pattern[str]:
    alternatives = []
    for quote in style.quotes:
        q = re.escape(quote)
        alternatives.append(rf"{q}(?:\\.|[^{q}\\])*{q}")
    patterns = []
    if alternatives:
        patterns.append(f"(?P<string>{'|'.join(alternatives)})")
    if style.block is not None:
        patterns.append(f"(?P<block>{re.escape(style.block[0])})")
    if style.line_tokens:
        tokens = "|".join(re.escape(token) for token in style.line_tokens)
        if style.line_start_only:
            prefix = r"^\s*"
        elif style.word_start_only:
            prefix = r"(?:(?<=\s)|^)"
        else:
            prefix = ""
        patterns.append(f"(?P<line>{prefix}(?:{tokens}))")
    return re.compile("|".join(patterns))


def strip_line(
    text: str, style: CommentStyle, in_block: bool = False
) -> tuple[str, list[str], bool]:
    """Remove comments from one line.

    Args:
        text: Line content without its terminator.
        style: Comment syntax to apply.
        in_block: Whether a block comment is open at the start of the line.

    Returns:
        tuple[str, list[str], bool]: The remaining text, the removed comments
            in order, and whether a block comment is still open at the end of
            the line.

    Examples:
        strip_line("x = 1  # one", select_style("python"))
        # ("x = 1  ", ["# one"], False)
    """
    kept: list[str] = []
    removed: list[str] = []
    pos = 0

    if in_block:
        closer = style.block[1]
        end = text.find(closer)
        if end == -1:
            return "", [text], True
        removed.append(text[: end + len(closer)])
        pos = end + len(closer)

    pattern = _token_pattern(style)
    while pos < len(text):
        match = pattern.search(text, pos)
        if match is None:
            kept.append(text[pos:])
            break

        kept.append(text[pos : match.start()])
        if match.lastgroup == "string":
            kept.append(match.group())
            pos = match.end()
        elif match.lastgroup == "line":
            comment_start = match.start() + len(match.group()) - len(match.group().lstrip())
            kept.append(text[match.start() : comment_start])
            removed.append(text[comment_start:])
            break
        else:
            closer = style.block[1]
            end = text.find(closer, match.end())
            if end == -1:
                removed.append(text[match.start() :])
                return "".join(kept), removed, True
            removed.append(text[match.start() : end + len(closer)])
            pos = end + len(closer)

    return "".join(kept), removed, False


def strip_comments(
    lines: Iterable[str],
    style: CommentStyle,
    source: str = STDIN_NAME,
    squeeze: bool = False,
    debug: DebugLog | None = None,
) -> Iterator[str]:
    """Yield lines with comments removed.

    Lines left blank by a removed comment are dropped, and trailing whitespace
    before a removed comment is trimmed. Originally blank lines are kept, or
    collapsed to one per run when `squeeze` is set. A ``#!`` line at the top is
    preserved.

    Args:
        lines: Input lines, with or without terminators.
        style: Comment syntax to apply.
        source: Identifier used in debug messages.
        squeeze: Collapse runs of blank lines.
        debug: Receives each removed comment.

    Yields:
        str: Output lines, keeping the terminator of the input line.
    """
    debug = debug or DebugLog()
    in_block = False
    previous_blank = False

    for number, raw in enumerate(lines, start=1):
        text = raw.rstrip("\r\n")
        ending = raw[len(text) :]

        if number == 1 and text.startswith("#!"):
            yield raw
            continue

        stripped, removed, in_block = strip_line(text, style, in_block)
        for comment in removed:
            debug.removed(source, number, comment)

        if removed:
            if not stripped.strip():
                continue
            text = stripped.rstrip()

        blank = not text.strip()
        if blank and squeeze and previous_blank:
            continue
        previous_blank = blank
        yield f"{text}{ending}"
