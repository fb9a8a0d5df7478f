"""Rendering of extracted lines for terminal display."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

from .constants import DEFAULT_TAB_WIDTH, GUTTER_SEPARATOR, GUTTER_WIDTH

WidthProvider = Callable[[], "int | None"]


def terminal_width() -> int | None:
    """Return the width of the terminal attached to stdout.

    Returns:
        int | None: Column count, or None when stdout is not a terminal or the
            size cannot be queried.
    """
    try:
        columns = os.get_terminal_size(sys.stdout.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return None
    return columns or None


def expand_tabs(text: str, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Replace tabs with spaces up to the next multiple of `tab_width`.

    Examples:
        expand_tabs("a\\tb", 4)  # "a   b"
    """
    if "\t" not in text:
        return text

    expanded: list[str] = []
    column = 0
    for char in text:
        if char == "\t":
            padding = tab_width - (column % tab_width)
            expanded.append(" " * padding)
            column += padding
        else:
            expanded.append(char)
            column += 1
    return "".join(expanded)


def split_chunks(text: str, width: int | None) -> list[str]:
    """Split `text` into pieces no longer than `width` characters.

    An empty line yields a single empty chunk; a missing or non-positive width
    leaves the text whole.
    """
    if width is None or width <= 0 or len(text) <= width:
        return [text]
    return [text[start : start + width] for start in range(0, len(text), width)]


class LineFormatter:
    """Format block content for output.

    Args:
        show_line_numbers: Prefix each line with a right-aligned line number.
        tab_width: Tab stop interval used when line numbers are shown.
        width_provider: Callable returning the current output width, or None
            when unknown. Consulted once per formatted line.
    """

    def __init__(
        self,
        show_line_numbers: bool = False,
        tab_width: int = DEFAULT_TAB_WIDTH,
        width_provider: WidthProvider = terminal_width,
    ):
        self.show_line_numbers = show_line_numbers
        self.tab_width = tab_width
        self.width_provider = width_provider

    def format(self, text: str, line_number: int) -> list[str]:
        """Render one content line.

        Args:
            text: Line content without its terminator.
            line_number: One-based number shown in the gutter.

        Returns:
            list[str]: Output lines, each ending with a newline. Without line
                numbers this is the input line unchanged.
        """
        if not self.show_line_numbers:
            return [f"{text}\n"]

        gutter = f"{line_number:>{GUTTER_WIDTH}}{GUTTER_SEPARATOR}"
        blank_gutter = " " * (len(gutter) - len(GUTTER_SEPARATOR)) + GUTTER_SEPARATOR

        width = self.width_provider()
        available = None if width is None else width - len(gutter)

        chunks = split_chunks(expand_tabs(text, self.tab_width), available)
        rendered = [f"{gutter}{chunks[0]}\n"]
        rendered.extend(f"{blank_gutter}{chunk}\n" for chunk in chunks[1:])
        return rendered
