"""Package-specific exception types."""

from __future__ import annotations


class MarkToolsError(Exception):
    """Base class for all marktools errors."""


class ParseError(MarkToolsError, ValueError):
    """Base class for parsing-related errors.

    Represents errors encountered while scanning a source for marker blocks.

    Args:
        source: Identifier of the source being scanned.
        line_number: One-based index of the offending line.
    """

    def __init__(self, source: str, line_number: int, message: str):
        self.source = source
        self.line_number = line_number
        super().__init__(message)


class LineTooLongError(ParseError):
    """Raised when a line exceeds the configured maximum length.

    Fatal for the source being scanned.

    Args:
        source: Identifier of the source being scanned.
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, source: str, line_number: int, max_line_length: int):
        self.max_line_length = max_line_length
        super().__init__(
            source,
            line_number,
            f"{source}:{line_number}: line exceeds maximum allowed length "
            f"of {max_line_length} characters",
        )


class UnmatchedEndMarkerError(ParseError):
    """An ``end`` marker was found while no block was open."""

    def __init__(self, source: str, line_number: int):
        super().__init__(source, line_number, f"{source}:{line_number}: unmatched end marker")


class UnknownMarkerError(ParseError):
    """A marker line declared a type other than ``begin`` or ``end``.

    Args:
        source: Identifier of the source being scanned.
        line_number: One-based index of the marker line.
        marker_type: The unrecognized type token.
    """

    def __init__(self, source: str, line_number: int, marker_type: str):
        self.marker_type = marker_type
        super().__init__(
            source,
            line_number,
            f"{source}:{line_number}: unknown marker type {marker_type!r}",
        )


class UnclosedMarkersError(ParseError):
    """One or more ``begin`` markers were still open at the end of a source.

    Reported once per source, listing every open marker in opening order.

    Args:
        source: Identifier of the source being scanned.
        line_numbers: Line numbers of the open markers, oldest first.
    """

    def __init__(self, source: str, line_numbers: list[int]):
        self.line_numbers = list(line_numbers)
        listing = ", ".join(str(number) for number in self.line_numbers)
        plural = "s" if len(self.line_numbers) > 1 else ""
        super().__init__(
            source,
            self.line_numbers[0],
            f"{source}: unmatched begin marker{plural} at line{plural} {listing}",
        )


class SourceError(MarkToolsError, IOError):
    """Raised when a source cannot be opened or decoded."""


class BookmarkError(MarkToolsError, ValueError):
    """Raised when a bookmark operation cannot be completed."""
