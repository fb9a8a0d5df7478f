"""
marktools: small command-line text utilities.

This package can be used both as a set of CLI tools and as a library.

CLI Usage:
    markblocks -n src/          # print marker-delimited blocks
    nocomment main.c            # strip comments
    bm add src && bm path src   # directory bookmarks

Library Usage:
    from marktools import extract_blocks

    result = extract_blocks(Path("notes.sh").read_text())
    print("".join(result.output), end="")
"""

from .bookmarks import Bookmark, BookmarkStore
from .comments import CommentStyle, DebugLog, select_style, strip_comments, strip_line
from .config import ConfigError, ExtractConfig, build_config
from .exceptions import (
    BookmarkError,
    LineTooLongError,
    MarkToolsError,
    ParseError,
    SourceError,
    UnclosedMarkersError,
    UnknownMarkerError,
    UnmatchedEndMarkerError,
)
from .extractor import Extractor, Reporter, extract_path
from .formatter import LineFormatter, expand_tabs, terminal_width
from .models import ExtractResult, Line, ParserStatus
from .parser import extract_blocks, parse_lines, recognize_marker

__version__ = "0.1.0"

__all__ = [
    # Block extraction
    "recognize_marker",
    "parse_lines",
    "extract_blocks",
    "extract_path",
    "Extractor",
    "Reporter",
    "LineFormatter",
    "expand_tabs",
    "terminal_width",
    # Comment removal
    "CommentStyle",
    "DebugLog",
    "select_style",
    "strip_comments",
    "strip_line",
    # Bookmarks
    "Bookmark",
    "BookmarkStore",
    # Configuration and data models
    "ExtractConfig",
    "build_config",
    "ExtractResult",
    "Line",
    "ParserStatus",
    # Exceptions
    "BookmarkError",
    "ConfigError",
    "LineTooLongError",
    "MarkToolsError",
    "ParseError",
    "SourceError",
    "UnclosedMarkersError",
    "UnknownMarkerError",
    "UnmatchedEndMarkerError",
    # Version
    "__version__",
]
