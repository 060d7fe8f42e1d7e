"""Chunk-boundary transparency tests.

A tag or text run that straddles a read boundary must be lexed exactly as
if it sat inside one chunk. Each test formats the same input with the
default chunk size and with tiny chunks or short reads, and compares.
"""

from __future__ import annotations

from io import StringIO

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tagline import FormatConfig, format_stream, format_string
from tagline.config import DEFAULT_CHUNK_SIZE

DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<catalog xmlns="urn:example">
    <book id="bk101"
          lang="en">
        <author>Gambardella, Matthew</author>
        <title>XML Developer&apos;s Guide</title>
        <price>44.95</price>
        <notes></notes>
        <cover href="cover.png"/>
    </book>
</catalog>
"""

EXPECTED = """<?xml version="1.0" encoding="UTF-8"?>
<catalog xmlns="urn:example">
  <book id="bk101"          lang="en">
    <author>Gambardella, Matthew</author>
    <title>XML Developer's Guide</title>
    <price>44.95</price>
    <notes/>
    <cover href="cover.png"/>
  </book>
</catalog>
"""


def format_with_chunk_size(source: str, chunk_size: int) -> str:
    dest = StringIO()
    format_stream(StringIO(source), dest, config=FormatConfig(chunk_size=chunk_size))
    return dest.getvalue()


class TestChunkSizes:
    """Same output for every chunk size."""

    def test_default_chunk_size(self) -> None:
        assert format_string(DOCUMENT) == EXPECTED

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 7, 16, 64])
    def test_small_chunks(self, chunk_size: int) -> None:
        assert format_with_chunk_size(DOCUMENT, chunk_size) == EXPECTED

    @pytest.mark.parametrize("max_read", [1, 3, 10])
    def test_short_reads_are_not_end_of_stream(self, trickle, max_read: int) -> None:
        source = trickle(DOCUMENT, max_read)
        dest = StringIO()
        format_stream(source, dest)
        assert dest.getvalue() == EXPECTED
        assert source.reads > len(DOCUMENT) // max_read


class TestDefaultBoundary:
    """Tokens straddling the real 4096-character boundary."""

    @pytest.mark.parametrize("offset", [-3, -2, -1, 0, 1])
    def test_tag_straddles_boundary(self, offset: int) -> None:
        # Pad so that <item attr="value"> starts just before the boundary
        padding = " " * (DEFAULT_CHUNK_SIZE + offset - len("<root>"))
        source = f'<root>{padding}<item attr="value">text</item></root>'
        assert format_string(source) == '<root>\n  <item attr="value">text</item>\n</root>\n'

    @pytest.mark.parametrize("offset", [-4, -1, 0, 2])
    def test_text_straddles_boundary(self, offset: int) -> None:
        head = "<r><t>"
        text = "x" * (DEFAULT_CHUNK_SIZE + offset - len(head)) + " &amp; tail"
        source = f"{head}{text}</t></r>"
        expected_text = text.replace("&amp;", "&")
        assert format_string(source) == f"<r>\n  <t>{expected_text}</t>\n</r>\n"

    def test_line_break_at_boundary(self) -> None:
        head = "<r>"
        source = head + " " * (DEFAULT_CHUNK_SIZE - len(head) - 1) + "\r\n<e/></r>"
        assert format_string(source) == "<r>\n  <e/>\n</r>\n"


leaf_names = st.sampled_from(["a", "b", "item", "x1"])
leaf_text = st.text(alphabet="abc xyz09", min_size=1, max_size=12).filter(lambda s: s.strip())


@st.composite
def documents(draw: st.DrawFn, depth: int = 0) -> str:
    name = draw(leaf_names)
    if depth >= 3:
        kind = draw(st.sampled_from(["empty", "text", "selfclosing"]))
    else:
        kind = draw(st.sampled_from(["empty", "text", "selfclosing", "children"]))
    if kind == "empty":
        return f"<{name}></{name}>"
    if kind == "text":
        return f"<{name}>{draw(leaf_text)}</{name}>"
    if kind == "selfclosing":
        return f"<{name}/>"
    children = draw(st.lists(documents(depth + 1), min_size=1, max_size=3))
    sep = draw(st.sampled_from(["", "\n", "\n  ", " "]))
    return f"<{name}>{sep}{sep.join(children)}{sep}</{name}>"


class TestChunkIndependence:
    @given(source=documents(), chunk_size=st.integers(min_value=1, max_value=32))
    @settings(max_examples=150)
    def test_output_independent_of_chunk_size(self, source: str, chunk_size: int) -> None:
        assert format_with_chunk_size(source, chunk_size) == format_string(source)
