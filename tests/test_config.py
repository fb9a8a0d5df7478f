from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from marktools.config import (
    ConfigError,
    ExtractConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".marktools.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.marktools]
        print_line_numbers = true
        print_filenames = true
        suppress_errors = true
        print_content = false
        print_stats = true
        tab_width = 4
        max_line_length = -1
        """,
    )

    config = load_config(tmp_path)

    assert config == ExtractConfig(
        print_line_numbers=True,
        print_filenames=True,
        suppress_errors=True,
        print_content=False,
        print_stats=True,
        tab_width=4,
        max_line_length=-1,
    )


def test_accepts_dashed_keys(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.marktools]
        max-line-length = 120
        """,
    )

    assert load_config(tmp_path).max_line_length == 120


def test_loads_config_from_dotfile_in_parent(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [marktools]
        print_filenames = true
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    assert load_config(nested).print_filenames is True


def test_pyproject_without_table_falls_through_to_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        value = 1
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [tool.marktools]
        tab_width = 2
        """,
    )

    assert load_config(tmp_path).tab_width == 2


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.marktools\n", encoding="utf-8")

    assert load_config(tmp_path) == ExtractConfig()


def test_unknown_key_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.marktools]
        colour = "red"
        """,
    )

    with pytest.raises(ConfigError, match=r"Invalid `\[tool.marktools\]` settings"):
        load_config(tmp_path)


def test_non_table_value_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        marktools = 3
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_empty_table_gives_defaults(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.marktools]\n")

    assert load_config(tmp_path) == ExtractConfig()


@pytest.mark.parametrize(
    "config, message",
    [
        (ExtractConfig(tab_width=0), "`tab_width` must be a positive integer"),
        (ExtractConfig(tab_width=True), "`tab_width` must be an integer"),
        (ExtractConfig(max_line_length=0), "`max_line_length` must be a positive integer or -1"),
        (ExtractConfig(max_line_length=-2), "`max_line_length` must be a positive integer or -1"),
        (ExtractConfig(max_line_length="10"), "`max_line_length` must be an integer"),
        (ExtractConfig(print_stats="yes"), "`print_stats` must be a boolean"),
    ],
)
def test_validate_config_rejects(config: ExtractConfig, message: str):
    with pytest.raises(ConfigError) as exc_info:
        validate_config(config)

    assert str(exc_info.value) == message


def test_validate_config_accepts_unlimited_line_length():
    validate_config(ExtractConfig(max_line_length=-1))


def test_apply_overrides_ignores_none():
    config = ExtractConfig()

    assert apply_overrides(config, print_filenames=None) is config
    assert apply_overrides(config, print_filenames=True).print_filenames is True


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.marktools]
        tab_width = 2
        print_filenames = true
        """,
    )

    config = build_config(tmp_path, tab_width=3, print_line_numbers=None)

    assert config.tab_width == 3
    assert config.print_filenames is True


def test_build_config_validates(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, tab_width=-1)
