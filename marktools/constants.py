"""Constants used across the marktools package."""

from __future__ import annotations

import re

from .config import ExtractConfig

DEFAULT_CONFIG = ExtractConfig()

# Marker lines, e.g. "# -- mark begin --" or "// -- mark end --"
MARKER_PATTERN = re.compile(
    r"^\s*(?:#|;|//|/\*)+\s*(?:--\s*)?mark\s+(?P<kind>[^\s-]+)\s+--"
)
BEGIN_MARKER = "begin"
END_MARKER = "end"

# Limits
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length
DEFAULT_TAB_WIDTH = DEFAULT_CONFIG.tab_width

# Line number gutter
GUTTER_WIDTH = 6
GUTTER_SEPARATOR = " | "

STDIN_NAME = "<stdin>"
