import pytest

from marktools.exceptions import UnmatchedEndMarkerError
from marktools.models import Line, ParserContext, ParserState
from marktools.parser import _try_close_block, _try_open_block


def _marker(kind: str | None, number: int = 1) -> Line:
    return Line(text=f"# -- mark {kind} --", source="s", number=number, marker=kind)


def test_try_open_block_pushes_marker():
    ctx = ParserContext()
    line = _marker("begin")

    assert _try_open_block(ctx, line) is True
    assert ctx.state is ParserState.INSIDE
    assert ctx.markers == [line]


def test_try_open_block_ignores_other_markers():
    ctx = ParserContext()

    assert _try_open_block(ctx, _marker("end")) is False
    assert _try_open_block(ctx, _marker(None)) is False
    assert ctx.state is ParserState.OUTSIDE
    assert ctx.markers == []


def test_try_close_block_pops_by_depth():
    first, second = _marker("begin", 1), _marker("begin", 2)
    ctx = ParserContext(state=ParserState.INSIDE, markers=[first, second])

    assert _try_close_block(ctx, _marker("end", 3)) is True
    assert ctx.markers == [first]
    assert ctx.state is ParserState.INSIDE
    assert ctx.block_closed is False

    assert _try_close_block(ctx, _marker("end", 4)) is True
    assert ctx.markers == []
    assert ctx.state is ParserState.OUTSIDE
    assert ctx.block_closed is True


def test_try_close_block_raises_on_empty_stack():
    ctx = ParserContext()

    with pytest.raises(UnmatchedEndMarkerError) as exc_info:
        _try_close_block(ctx, _marker("end", 7))

    assert exc_info.value.line_number == 7
    assert ctx.state is ParserState.OUTSIDE
    assert ctx.block_closed is False


def test_try_close_block_ignores_begin():
    ctx = ParserContext()

    assert _try_close_block(ctx, _marker("begin")) is False
