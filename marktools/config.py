"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

UNLIMITED = -1


@dataclass
class ExtractConfig:
    """Configuration for extracting marker-delimited blocks.

    Attributes:
        print_line_numbers: Prefix each emitted line with its line number.
        print_filenames: Emit a header naming the source before its first block.
        suppress_errors: Count diagnostics without printing them. Failures to
            open a top-level source are printed regardless.
        print_content: Emit block content. When False only the identifiers of
            sources containing at least one block are printed.
        print_stats: Emit a summary of scanned and printed lines on stderr.
        max_line_length: Maximum line length in characters, or ``-1`` for no
            limit. Longer lines abort processing of the current source.
        tab_width: Tab stop interval used when line numbers are shown.

    Examples:
        ExtractConfig(print_line_numbers=True, max_line_length=-1)
    """

    # Output
    print_line_numbers: bool = False
    print_filenames: bool = False
    print_content: bool = True
    print_stats: bool = False

    # Diagnostics
    suppress_errors: bool = False

    # Formatting
    tab_width: int = 8

    # Limits
    max_line_length: int = 4096


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`tab_width` must be a positive integer")
    """


_BOOLEAN_FIELDS = (
    "print_line_numbers",
    "print_filenames",
    "print_content",
    "print_stats",
    "suppress_errors",
)


def load_config(search_path: Path) -> ExtractConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.marktools]`` table from `pyproject.toml` and the
    ``[marktools]`` or ``[tool.marktools]`` table from `.marktools.toml` when
    present. Returns default values when no configuration is found. TOML files
    that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ExtractConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a marktools table is present but not a mapping or
            contains unsupported keys.
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "marktools")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".marktools.toml",
            table_paths=[("marktools",), ("tool", "marktools")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ExtractConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ExtractConfig | None:
    if not config_file.is_file():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ExtractConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return ExtractConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys are conventionally dashed; dataclass fields are not.
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ExtractConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ExtractConfig) -> None:
    """Validate an `ExtractConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a flag is not a boolean, `tab_width` is not a positive
            integer, or `max_line_length` is neither positive nor ``-1``.
    """
    for name in _BOOLEAN_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    _ensure_integers({"tab_width": config.tab_width, "max_line_length": config.max_line_length})

    if config.tab_width <= 0:
        raise ConfigError("`tab_width` must be a positive integer")
    if config.max_line_length <= 0 and config.max_line_length != UNLIMITED:
        raise ConfigError("`max_line_length` must be a positive integer or -1")


def apply_overrides(config: ExtractConfig, **overrides: object) -> ExtractConfig:
    """Apply override values to an `ExtractConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by field name; values set to None are
            ignored.

    Returns:
        ExtractConfig: New configuration with the overrides applied, or the
        original configuration when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `ExtractConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ExtractConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ExtractConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), print_line_numbers=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
