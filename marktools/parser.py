"""Marker block parsing."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable

from .config import UNLIMITED, ExtractConfig, validate_config
from .constants import BEGIN_MARKER, END_MARKER, MARKER_PATTERN
from .exceptions import (
    LineTooLongError,
    ParseError,
    UnclosedMarkersError,
    UnknownMarkerError,
    UnmatchedEndMarkerError,
)
from .formatter import LineFormatter
from .models import ExtractResult, Line, ParserContext, ParserState, ParserStatus

Emit = Callable[[str], None]
Report = Callable[[ParseError], None]


def recognize_marker(text: str) -> str | None:
    """Return the marker type declared on a line.

    Args:
        text: A single line, with or without its terminator.

    Returns:
        str | None: The type token (``"begin"``, ``"end"`` or anything else
            written in its place), or None when the line is not a marker.

    Examples:
        recognize_marker("# -- mark begin --")  # "begin"
        recognize_marker("  // -- mark end -- */")  # "end"
        recognize_marker("print('hello')")  # None
    """
    match = MARKER_PATTERN.match(text)
    if match is None:
        return None
    return match.group("kind")


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def _try_open_block(ctx: ParserContext, line: Line) -> bool:
    """Push a ``begin`` marker onto the marker stack.

    Args:
        ctx: Parser context to update.
        line: The line being scanned.

    Returns:
        bool: True when the line was a ``begin`` marker.
    """
    if line.marker != BEGIN_MARKER:
        return False

    ctx.markers.append(line)
    ctx.state = ParserState.INSIDE
    return True


def _try_close_block(ctx: ParserContext, line: Line) -> bool:
    """Pop the most recently opened marker on an ``end`` marker.

    Blocks are matched by depth only; an ``end`` closes whatever is on top of
    the stack.

    Args:
        ctx: Parser context to update.
        line: The line being scanned.

    Returns:
        bool: True when the line was an ``end`` marker that closed a block.

    Raises:
        UnmatchedEndMarkerError: If the line is an ``end`` marker and no block
            is open. The context is left unchanged.
    """
    if line.marker != END_MARKER:
        return False

    if not ctx.markers:
        raise UnmatchedEndMarkerError(line.source, line.number)

    ctx.markers.pop()
    if not ctx.markers:
        ctx.state = ParserState.OUTSIDE
        ctx.block_closed = True
    return True


def _emit_header(
    ctx: ParserContext, source: str, config: ExtractConfig, status: ParserStatus, emit: Emit
) -> None:
    if ctx.header_printed:
        return
    if not config.print_content:
        emit(f"{source}\n")
    elif config.print_filenames:
        if status.output_written:
            emit("\n")
        emit(f"==> {source} <==\n")
    ctx.header_printed = True


def parse_lines(
    lines: Iterable[str],
    source: str,
    config: ExtractConfig,
    status: ParserStatus,
    emit: Emit,
    report: Report,
    formatter: LineFormatter | None = None,
) -> ParserContext:
    """Scan lines for marker blocks and emit their content.

    Recoverable errors (unmatched ``end`` markers, unknown marker types and
    markers left open at the end of input) are counted in `status` and passed
    to `report`; scanning continues afterwards.

    Args:
        lines: Lines of the source, with or without terminators.
        source: Identifier used in headers and diagnostics.
        config: Extraction options.
        status: Run-wide counters, updated in place.
        emit: Receives rendered output, one newline-terminated string per call.
        report: Receives recoverable errors.
        formatter: Renders content lines. Built from `config` when omitted.

    Returns:
        ParserContext: Final state of the source.

    Raises:
        LineTooLongError: If a line exceeds `config.max_line_length`. Nothing
            further is read from `lines`.
    """
    formatter = formatter or LineFormatter(config.print_line_numbers, config.tab_width)
    ctx = ParserContext()

    def write(text: str) -> None:
        status.output_written = True
        emit(text)

    for number, raw in enumerate(lines, start=1):
        text = _strip_terminator(raw)
        if config.max_line_length != UNLIMITED and len(text) > config.max_line_length:
            raise LineTooLongError(source, number, config.max_line_length)

        status.lines_scanned += 1
        line = Line(text=text, source=source, number=number, marker=recognize_marker(text))

        if line.marker is None:
            if ctx.state is ParserState.INSIDE and config.print_content:
                for rendered in formatter.format(line.text, line.number):
                    write(rendered)
                status.lines_printed += 1
            continue

        reopening = ctx.state is ParserState.OUTSIDE and ctx.block_closed
        try:
            if _try_open_block(ctx, line):
                _emit_header(ctx, source, config, status, write)
                if reopening and config.print_content:
                    write("\n")
                continue

            if _try_close_block(ctx, line):
                continue

            raise UnknownMarkerError(source, line.number, line.marker)
        except ParseError as error:
            status.errors += 1
            report(error)

    if ctx.markers:
        status.errors += 1
        report(UnclosedMarkersError(source, [marker.number for marker in ctx.markers]))

    return ctx


def extract_blocks(
    content: str,
    source: str = "<string>",
    config: ExtractConfig | None = None,
    formatter: LineFormatter | None = None,
) -> ExtractResult:
    """Extract marker blocks from in-memory text.

    Args:
        content: Text to scan.
        source: Identifier used in headers and diagnostics.
        config: Extraction options. Defaults to a new `ExtractConfig`.
        formatter: Renders content lines. Built from `config` when omitted.

    Returns:
        ExtractResult: Rendered output, counters and recoverable diagnostics.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the configured maximum length.

    Examples:
        extract_blocks("# -- mark begin --\\nhello\\n# -- mark end --\\n").output
        # ["hello\\n"]
    """
    config = config or ExtractConfig()
    validate_config(config)

    output: list[str] = []
    diagnostics: list[Exception] = []
    status = ParserStatus()
    parse_lines(
        io.StringIO(content, newline=None),
        source,
        config,
        status,
        emit=output.append,
        report=diagnostics.append,
        formatter=formatter,
    )
    return ExtractResult(output=output, status=status, diagnostics=diagnostics)
