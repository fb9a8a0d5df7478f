"""Running the block parser over files, directory trees and streams."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import click

from .config import ExtractConfig, validate_config
from .constants import STDIN_NAME
from .exceptions import LineTooLongError, ParseError, SourceError
from .filesystem import iter_source_files, safe_read
from .formatter import LineFormatter
from .models import ParserStatus
from .parser import parse_lines


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


def _echo_out(text: str) -> None:
    click.echo(text, nl=False)


@dataclass
class Reporter:
    """Route diagnostics to stderr according to the error policy.

    Attributes:
        suppress_errors: Drop diagnostics unless they are forced.
        warn: Receives each diagnostic that is not suppressed.
    """

    suppress_errors: bool = False
    warn: Callable[[str], None] = _echo_err

    def error(self, message: str, force: bool = False) -> None:
        if force or not self.suppress_errors:
            self.warn(f"Error: {message}")

    def parse_error(self, error: ParseError) -> None:
        self.error(str(error))


class Extractor:
    """Extract marker blocks from a sequence of sources.

    Counters accumulate in `status` across every source handed to this
    instance. Errors confined to one source are counted and reported, and
    never stop the run.

    Args:
        config: Extraction options.
        emit: Receives rendered output. Defaults to writing to stdout.
        reporter: Receives diagnostics. Defaults to one honoring
            `config.suppress_errors`.
        formatter: Renders content lines. Built from `config` when omitted.

    Examples:
        extractor = Extractor(ExtractConfig(print_filenames=True))
        status = extractor.run([Path("src")])
    """

    def __init__(
        self,
        config: ExtractConfig | None = None,
        emit: Callable[[str], None] | None = None,
        reporter: Reporter | None = None,
        formatter: LineFormatter | None = None,
    ):
        self.config = config or ExtractConfig()
        validate_config(self.config)
        self.emit = emit or _echo_out
        self.reporter = reporter or Reporter(suppress_errors=self.config.suppress_errors)
        self.formatter = formatter or LineFormatter(
            self.config.print_line_numbers, self.config.tab_width
        )
        self.status = ParserStatus()

    def _fail(self, message: str, force: bool = False) -> None:
        self.status.errors += 1
        self.reporter.error(message, force=force)

    def process_stream(self, stream: TextIO, source: str) -> None:
        """Scan an already opened text stream.

        Fatal errors are counted and reported instead of raised.

        Args:
            stream: Text stream to read line by line.
            source: Identifier used in headers and diagnostics.
        """
        try:
            parse_lines(
                stream,
                source,
                self.config,
                self.status,
                emit=self.emit,
                report=self.reporter.parse_error,
                formatter=self.formatter,
            )
        except LineTooLongError as error:
            self._fail(f"{error}; skipping rest of {source}")
        except UnicodeDecodeError as error:
            self._fail(f"Invalid UTF-8 sequence in {source}: {error}")
        except OSError as error:
            self._fail(f"Error reading {source}: {error}")

    def process_file(self, path: Path, top_level: bool = False) -> None:
        """Open and scan a single file.

        Args:
            path: File to scan.
            top_level: Whether the file was named by the caller rather than
                found during a directory walk. Open failures of top-level
                files are reported even when errors are suppressed.
        """
        try:
            stream = safe_read(path)
        except SourceError as error:
            self._fail(str(error), force=top_level)
            return

        with stream:
            self.process_stream(stream, str(path))

    def process_directory(self, root: Path) -> None:
        """Scan every file below `root` in sorted order."""

        def on_error(error: OSError) -> None:
            is_root = error.filename is not None and Path(error.filename) == root
            self._fail(f"Error accessing {error.filename}: {error.strerror}", force=is_root)

        for path in iter_source_files(root, on_error=on_error):
            self.process_file(path)

    def process_path(self, path: Path) -> None:
        """Scan a file or, recursively, a directory named by the caller."""
        if path.is_dir():
            self.process_directory(path)
        else:
            self.process_file(path, top_level=True)

    def run(self, paths: Iterable[Path], stdin: TextIO | None = None) -> ParserStatus:
        """Scan every path in order, or `stdin` when no path is given.

        A path of ``-`` also reads `stdin`.

        Args:
            paths: Files and directories to scan.
            stdin: Stream used for ``-`` and when `paths` is empty. Defaults to
                the process standard input.

        Returns:
            ParserStatus: Counters accumulated over the whole run.
        """
        paths = list(paths)

        if not paths:
            self.process_stream(stdin or sys.stdin, STDIN_NAME)
        for path in paths:
            if str(path) == "-":
                self.process_stream(stdin or sys.stdin, STDIN_NAME)
            else:
                self.process_path(path)
        return self.status


def extract_path(
    path: Path,
    config: ExtractConfig | None = None,
    emit: Callable[[str], None] | None = None,
    reporter: Reporter | None = None,
) -> ParserStatus:
    """Extract blocks from one file or directory tree.

    Returns:
        ParserStatus: Counters for the run.
    """
    return Extractor(config, emit=emit, reporter=reporter).run([path])
