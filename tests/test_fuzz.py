from __future__ import annotations

import os

import pytest

from marktools.comments import COMMENT_STYLES, strip_line
from marktools.parser import extract_blocks

atheris = pytest.importorskip("atheris")


def test_extract_blocks_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        if provider.ConsumeBool():
            lines.append(f"# -- mark {provider.PickValueInList(['begin', 'end', 'other'])} --")
        else:
            lines.append(provider.ConsumeUnicodeNoSurrogates(40).replace("\n", " "))

    result = extract_blocks("\n".join(lines) + "\n")

    assert result.status.lines_scanned >= len(lines)
    assert result.status.lines_printed <= result.status.lines_scanned
    assert result.status.errors == len(result.diagnostics)


def test_strip_line_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64).replace("\n", " ")
        for style in COMMENT_STYLES.values():
            kept, removed, _ = strip_line(text, style)
            assert len(kept) + sum(len(comment) for comment in removed) <= len(text)
