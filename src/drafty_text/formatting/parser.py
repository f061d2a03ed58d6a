"""Parser converting inline markup text into a Drafty document."""

import logging
import re
from typing import Optional, Sequence

from drafty_text.formatting.chunks import chunkify, draftify
from drafty_text.formatting.entities import extract_entities
from drafty_text.formatting.ir import (
    Block,
    Document,
    Entity,
    EntityRange,
    FormatRange,
    Style,
    StyleRange,
)
from drafty_text.formatting.spans import STYLE_RULES, StyleRule, build_span_tree


logger = logging.getLogger(__name__)


class DraftyParser:
    """Parse inline markup into a ``Document``.

    Markup never spans lines: every line is parsed on its own and the
    lines are then joined with a space marked by a ``BR`` range.
    """

    # Line breaks: LF or CRLF
    LINE_BREAK_PATTERN = re.compile(r"\r?\n")

    def __init__(self, style_rules: Optional[Sequence[StyleRule]] = None) -> None:
        """Initialize the parser.

        Args:
            style_rules: Inline style rules, defaults to bold, italic,
                strikethrough and monospace
        """
        self.style_rules = tuple(style_rules) if style_rules is not None else STYLE_RULES

    def parse(self, content: str) -> Document:
        """Convert markup text to a Document.

        Args:
            content: Text with inline markup, possibly multi-line

        Returns:
            Document with clean text, ranges and deduplicated entities
        """
        lines = self.LINE_BREAK_PATTERN.split(content)

        entities: list[Entity] = []
        # Raw matched value -> index in entities. Local to this call.
        entity_map: dict[str, int] = {}

        blocks: list[Block] = []
        for line in lines:
            block = self._parse_line(line)

            for ext in extract_entities(block.text):
                index = entity_map.get(ext.value)
                if index is None:
                    index = len(entities)
                    entity_map[ext.value] = index
                    entities.append(Entity(kind=ext.kind, data=ext.data))
                block.ranges.append(EntityRange(ext.at, ext.length, index))

            blocks.append(block)

        text, ranges = self._merge_blocks(blocks)
        logger.debug(
            "Parsed %d line(s): %d range(s), %d entit(ies)",
            len(lines), len(ranges), len(entities),
        )

        return Document(
            text=text,
            ranges=ranges or None,
            entities=entities or None,
        )

    def _parse_line(self, line: str) -> Block:
        """Strip markup from a single line and collect its style ranges."""
        spans = build_span_tree(line, self.style_rules)
        if not spans:
            return Block(text=line)

        chunks = chunkify(line, 0, len(line), spans)
        return draftify(chunks, 0)

    def _merge_blocks(self, blocks: list[Block]) -> tuple[str, list[FormatRange]]:
        """Join blocks with a space, marking each join with a BR range."""
        if not blocks:
            return "", []

        parts = [blocks[0].text]
        ranges = list(blocks[0].ranges)
        length = len(blocks[0].text)
        for block in blocks[1:]:
            ranges.append(StyleRange(length, 1, Style.LINE_BREAK))
            offset = length + 1
            ranges.extend(rng.shifted(offset) for rng in block.ranges)
            parts.append(block.text)
            length = offset + len(block.text)

        return " ".join(parts), ranges


_default_parser = DraftyParser()


def parse(content: str) -> Document:
    """Parse markup text with the default rules."""
    return _default_parser.parse(content)
