"""Data models for marktools."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ParserState(Enum):
    """Block parser states.

    Attributes:
        OUTSIDE: No marker is open; content lines are discarded.
        INSIDE: At least one ``begin`` marker is open; content lines are emitted.
    """

    OUTSIDE = auto()
    INSIDE = auto()


@dataclass(frozen=True)
class Line:
    """A single input line.

    Attributes:
        text: Line content without its line terminator.
        source: Identifier of the originating file or stream.
        number: One-based line number within `source`.
        marker: Marker type found on the line, or None for ordinary content.
    """

    text: str
    source: str
    number: int
    marker: str | None = None


@dataclass
class ParserStatus:
    """Counters accumulated over every source in a run.

    Attributes:
        lines_scanned: Lines read from all sources.
        lines_printed: Content lines written to the output.
        errors: Diagnostics raised, fatal or not.
        output_written: Whether anything, headers included, has been emitted.
    """

    lines_scanned: int = 0
    lines_printed: int = 0
    errors: int = 0
    output_written: bool = field(default=False, compare=False, repr=False)

    def summary(self) -> str:
        return (
            f"{self.lines_printed} lines printed, {self.lines_scanned} lines scanned, "
            f"{self.errors} error{'' if self.errors == 1 else 's'}"
        )


@dataclass
class ParserContext:
    """Per-source parser state.

    Attributes:
        state: Current parser state.
        markers: Open ``begin`` markers, oldest first.
        header_printed: Whether the file header was emitted for this source.
        block_closed: Whether a top-level block has already been closed.
    """

    state: ParserState = ParserState.OUTSIDE
    markers: list[Line] = field(default_factory=list)
    header_printed: bool = False
    block_closed: bool = False


@dataclass
class ExtractResult:
    """Structured result of extracting blocks from in-memory text.

    Attributes:
        output: Rendered output lines, including trailing newlines.
        status: Counters for the extraction.
        diagnostics: Recoverable errors reported while scanning, in order.
    """

    output: list[str]
    status: ParserStatus
    diagnostics: list[Exception]
