from __future__ import annotations

import pytest

from marktools.formatter import LineFormatter, expand_tabs, split_chunks, terminal_width


@pytest.mark.parametrize(
    "text, tab_width, expected",
    [
        ("no tabs", 8, "no tabs"),
        ("\tx", 8, "        x"),
        ("ab\tx", 4, "ab  x"),
        ("abcd\tx", 4, "abcd    x"),
        ("a\tb\tc", 2, "a b c"),
    ],
)
def test_expand_tabs_aligns_to_tab_stops(text: str, tab_width: int, expected: str):
    assert expand_tabs(text, tab_width) == expected


def test_split_chunks():
    assert split_chunks("abcdefg", 3) == ["abc", "def", "g"]
    assert split_chunks("abc", 3) == ["abc"]
    assert split_chunks("", 3) == [""]
    assert split_chunks("abcdef", None) == ["abcdef"]
    assert split_chunks("abcdef", 0) == ["abcdef"]


def test_formatter_without_line_numbers_is_verbatim():
    formatter = LineFormatter(width_provider=lambda: 10)

    assert formatter.format("\tlong line that is not wrapped", 3) == [
        "\tlong line that is not wrapped\n"
    ]


def test_formatter_right_aligns_line_number():
    formatter = LineFormatter(True, width_provider=lambda: None)

    assert formatter.format("text", 42) == ["    42 | text\n"]


def test_formatter_expands_tabs_with_line_numbers():
    formatter = LineFormatter(True, tab_width=4, width_provider=lambda: None)

    assert formatter.format("\tx", 1) == ["     1 |     x\n"]


def test_formatter_wraps_to_terminal_width():
    formatter = LineFormatter(True, width_provider=lambda: 13)

    assert formatter.format("abcdefghij", 5) == [
        "     5 | abcd\n",
        "       | efgh\n",
        "       | ij\n",
    ]


def test_formatter_consults_width_once_per_line():
    widths = iter([None, 12])
    formatter = LineFormatter(True, width_provider=lambda: next(widths))

    assert formatter.format("abcdef", 1) == ["     1 | abcdef\n"]
    assert formatter.format("abcdef", 2) == ["     2 | abc\n", "       | def\n"]


def test_formatter_ignores_width_narrower_than_gutter():
    formatter = LineFormatter(True, width_provider=lambda: 5)

    assert formatter.format("abcdef", 1) == ["     1 | abcdef\n"]


def test_terminal_width_unknown_without_terminal(monkeypatch):
    def _no_terminal(fd):
        raise OSError("not a terminal")

    monkeypatch.setattr("marktools.formatter.os.get_terminal_size", _no_terminal)

    assert terminal_width() is None


def test_continuation_gutter_matches_wide_line_numbers():
    formatter = LineFormatter(True, width_provider=lambda: 15)

    assert formatter.format("abcdefgh", 1234567) == [
        "1234567 | abcde\n",
        "        | fgh\n",
    ]
