"""Detection of inline markup spans and their arrangement into a tree."""

import logging
import re
from typing import NamedTuple, Optional, Sequence

from drafty_text.formatting.ir import Span, Style


logger = logging.getLogger(__name__)


class StyleRule(NamedTuple):
    """A style tag and the pattern of its markup.

    The pattern has exactly one capture group: the styled content without
    the delimiters.
    """

    style: str
    pattern: re.Pattern


# Order matters only for spans which start at the same position and have
# the same length, which the delimiters make impossible.
STYLE_RULES: tuple[StyleRule, ...] = (
    # *bold*
    StyleRule(Style.BOLD, re.compile(r"(?<!\w)\*([^\s*](?:[^*]*[^\s*])?)\*(?!\w)")),
    # _italic_, underscore is a word character so it is excluded explicitly
    StyleRule(Style.ITALIC, re.compile(r"(?<![^\W_])_([^\s_](?:[^_]*[^\s_])?)_(?![^\W_])")),
    # ~strikethrough~
    StyleRule(Style.STRIKETHROUGH, re.compile(r"(?<!\w)~([^\s~](?:[^~]*[^\s~])?)~(?!\w)")),
    # `monospace`
    StyleRule(Style.CODE, re.compile(r"(?<!\w)`([^`]+)`(?!\w)")),
)


def spannify(line: str, rule: StyleRule) -> list[Span]:
    """Find all non-overlapping spans of one style in a line.

    ``start`` points at the opening delimiter, ``end`` at the closing one.
    """
    return [
        Span(start=m.start(0), end=m.end(1), style=rule.style, text=m.group(1))
        for m in rule.pattern.finditer(line)
    ]


def find_spans(line: str, rules: Sequence[StyleRule] = STYLE_RULES) -> list[Span]:
    """Collect spans of all rules, sorted by start then longest first."""
    spans: list[Span] = []
    for rule in rules:
        spans.extend(spannify(line, rule))
    spans.sort(key=lambda s: (s.start, -s.end))
    return spans


def to_tree(spans: Sequence[Span]) -> list[Span]:
    """Rearrange a sorted list of spans into a forest.

    Spans which start after the end of the previous top-level span become
    siblings, spans which end before it become its children. Spans which
    partially overlap are invalid markup and are dropped.
    """
    if not spans:
        return []

    last = spans[0]
    children: dict[int, list[Span]] = {id(last): []}
    tree: list[Span] = [last]
    for curr in spans[1:]:
        if curr.start > last.end:
            tree.append(curr)
            last = curr
            children[id(last)] = []
        elif curr.end < last.end:
            children[id(last)].append(curr)
        else:
            logger.debug(
                "Dropping %s span [%d, %d] overlapping %s span [%d, %d]",
                curr.style, curr.start, curr.end,
                last.style, last.start, last.end,
            )

    return [
        Span(
            start=span.start,
            end=span.end,
            style=span.style,
            text=span.text,
            children=to_tree(children[id(span)]),
        )
        for span in tree
    ]


def build_span_tree(
    line: str, rules: Optional[Sequence[StyleRule]] = None
) -> list[Span]:
    """Detect markup in a line and return it as a span forest."""
    return to_tree(find_spans(line, rules if rules is not None else STYLE_RULES))
