import dataclasses

import pytest

from marktools.models import Line, ParserContext, ParserState, ParserStatus


def test_parser_state_members():
    assert list(ParserState) == [ParserState.OUTSIDE, ParserState.INSIDE]


def test_parser_context_defaults():
    ctx = ParserContext()

    assert ctx.state is ParserState.OUTSIDE
    assert ctx.markers == []
    assert ctx.header_printed is False
    assert ctx.block_closed is False


def test_parser_contexts_do_not_share_marker_stacks():
    first, second = ParserContext(), ParserContext()
    first.markers.append(Line("x", "s", 1, "begin"))

    assert second.markers == []


def test_line_is_immutable():
    line = Line(text="hello", source="s", number=1)

    assert line.marker is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        line.text = "changed"


def test_parser_status_summary():
    assert ParserStatus().summary() == "0 lines printed, 0 lines scanned, 0 errors"
    assert (
        ParserStatus(lines_scanned=4, lines_printed=2, errors=1).summary()
        == "2 lines printed, 4 lines scanned, 1 error"
    )
