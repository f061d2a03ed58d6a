"""Markup stripping and flattening of styled chunks into ranges.

``chunkify`` turns a span forest into a tree of markup-free chunks, e.g.
``'hello *bold _italic_* and ~more~ world'`` becomes
``('hello ', (ST: 'bold ', (EM: 'italic')), ' and ', (DL: 'more'), ' world')``.
``draftify`` then concatenates the chunks into clean text and converts
every styled chunk into a range over that text.
"""

from typing import Sequence

from drafty_text.formatting.ir import Block, Chunk, FormatRange, Span, StyleRange


def chunkify(line: str, start: int, end: int, spans: Sequence[Span]) -> list[Chunk]:
    """Split ``line[start:end]`` into styled and unstyled chunks.

    Args:
        line: The raw line with markup
        start: Start of the window to process
        end: End of the window (exclusive)
        spans: Span forest for the window

    Returns:
        Chunks in left-to-right order
    """
    chunks: list[Chunk] = []
    for span in spans:
        if span.start > start:
            chunks.append(Chunk(text=line[start:span.start]))

        if span.children:
            # +1 skips the opening delimiter, span.end is the closing one.
            inner = chunkify(line, span.start + 1, span.end, span.children)
            chunks.append(Chunk(style=span.style, children=inner))
        else:
            chunks.append(Chunk(text=span.text, style=span.style))

        start = span.end + 1

    if start < end:
        chunks.append(Chunk(text=line[start:end]))

    return chunks


def draftify(chunks: Sequence[Chunk], start_at: int = 0) -> Block:
    """Concatenate chunks into a block of clean text with style ranges.

    Nested ranges come out before the range of their parent.

    Args:
        chunks: Chunk tree produced by ``chunkify``
        start_at: Offset of the first chunk in the final text

    Returns:
        Block with the clean text and its ranges
    """
    parts: list[str] = []
    ranges: list[FormatRange] = []
    length = 0
    for chunk in chunks:
        text = chunk.text
        if chunk.children:
            inner = draftify(chunk.children, start_at + length)
            text = inner.text
            ranges.extend(inner.ranges)

        if chunk.style is not None:
            ranges.append(StyleRange(start_at + length, len(text), chunk.style))

        parts.append(text)
        length += len(text)

    return Block(text="".join(parts), ranges=ranges)
