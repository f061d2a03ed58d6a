"""Tests for markup stripping and range flattening."""

from drafty_text.formatting.chunks import chunkify, draftify
from drafty_text.formatting.ir import Block, Chunk, Style, StyleRange
from drafty_text.formatting.spans import build_span_tree


class TestChunkify:
    """Tests for the markup stripper."""

    def test_nested_chunks(self):
        """Test that markup is removed and nesting preserved."""
        line = "a *b _c_ d* e"
        chunks = chunkify(line, 0, len(line), build_span_tree(line))

        assert chunks == [
            Chunk(text="a "),
            Chunk(style=Style.BOLD, children=[
                Chunk(text="b "),
                Chunk(text="c", style=Style.ITALIC),
                Chunk(text=" d"),
            ]),
            Chunk(text=" e"),
        ]

    def test_adjacent_spans(self):
        """Test spans with no unstyled text between them."""
        line = "*a*~b~"
        chunks = chunkify(line, 0, len(line), build_span_tree(line))

        assert chunks == [
            Chunk(text="a", style=Style.BOLD),
            Chunk(text="b", style=Style.STRIKETHROUGH),
        ]

    def test_trailing_text(self):
        """Test that text after the last span is kept."""
        line = "`x` tail"
        chunks = chunkify(line, 0, len(line), build_span_tree(line))

        assert chunks[-1] == Chunk(text=" tail")


class TestDraftify:
    """Tests for the block flattener."""

    def test_nested_ranges(self):
        """Test that nested chunks give overlapping absolute ranges."""
        line = "a *b _c_ d* e"
        chunks = chunkify(line, 0, len(line), build_span_tree(line))
        block = draftify(chunks)

        assert block == Block(
            text="a b c d e",
            ranges=[
                StyleRange(4, 1, Style.ITALIC),
                StyleRange(2, 5, Style.BOLD),
            ],
        )

    def test_start_offset(self):
        """Test that ranges are shifted by the base offset."""
        block = draftify([Chunk(text="x "), Chunk(text="y", style=Style.CODE)], 10)

        assert block.text == "x y"
        assert block.ranges == [StyleRange(12, 1, Style.CODE)]

    def test_plain_chunks(self):
        """Test that unstyled chunks produce no ranges."""
        block = draftify([Chunk(text="plain")])

        assert block == Block(text="plain", ranges=[])
