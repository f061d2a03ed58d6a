"""Rendering of Drafty documents through a pluggable formatter.

The renderer rebuilds a tree out of the flat list of ranges and calls the
formatter once per element, innermost first:

    formatter.apply(tag, data, content)

``tag`` and ``data`` are None for unstyled text. ``content`` is None for
out-of-band attachments, a string for leaf text and button titles, and a
list of already formatted child nodes otherwise.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Protocol, Sequence, TypeVar, Union

from drafty_text.formatting.ir import (
    Content,
    Document,
    EntityKind,
    EntityRange,
    FormatRange,
    Style,
    StyleRange,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Formatter(Protocol[T]):
    """Converts one document element into an output node."""

    def apply(self, tag: Optional[str], data: Optional[dict], content: Content) -> T:
        ...


FormatterLike = Union[Formatter, Callable[[Optional[str], Optional[dict], Content], Any]]


@dataclass
class RenderSpan:
    """Transient range resolved for rendering."""

    start: int
    end: int
    tag: Optional[str] = None
    key: Optional[int] = None
    data: Optional[dict[str, Any]] = None


class DraftyRenderer(Generic[T]):
    """Walks a document and drives a formatter bottom-up."""

    def __init__(self, formatter: FormatterLike) -> None:
        self._apply = getattr(formatter, "apply", formatter)

    def format(self, document: Document) -> T:
        """Convert a document into a tree of formatted nodes.

        Args:
            document: The document to render; it is not modified

        Returns:
            The node returned by the outermost ``apply`` call
        """
        text = document.plain_text
        ranges: Sequence[FormatRange] = document.ranges or []
        entities = document.entities or []

        if not ranges:
            if len(entities) != 1:
                return self._apply(None, None, text)
            # A lone entity, e.g. an attachment without text.
            ranges = [EntityRange(0, 0, 0)]

        spans = sorted(
            (self._resolve(rng, document) for rng in ranges),
            key=lambda s: (s.start, -(s.end - s.start)),
        )
        return self._apply(None, None, self.for_each(text, 0, len(text), spans))

    def _resolve(self, rng: FormatRange, document: Document) -> RenderSpan:
        """Normalize a range and attach its entity data."""
        length = max(rng.length, 0)
        offset = max(rng.offset, -1)
        span = RenderSpan(start=offset, end=offset + length)

        if isinstance(rng, StyleRange) and rng.style:
            span.tag = rng.style
        elif isinstance(rng, EntityRange):
            span.key = rng.key
            ent = document.entity_for(rng)
            if ent is not None and ent.kind:
                span.tag = ent.kind
                span.data = ent.data

        if not span.tag:
            logger.debug("Hiding unresolved range at %d (key=%s)", offset, span.key)
            span.tag = Style.HIDDEN
        return span

    def for_each(
        self,
        line: str,
        start: int,
        end: int,
        spans: Optional[Sequence[RenderSpan]],
    ) -> list[T]:
        """Format ``line[start:end]`` with the given sorted spans.

        Returns:
            Formatted nodes in left-to-right order
        """
        if not spans:
            return [self._apply(None, None, line[start:end])]

        result: list[T] = []
        i = 0
        while i < len(spans):
            span = spans[i]
            i += 1

            if span.start < 0:
                # Out-of-band, e.g. a trailing attachment.
                result.append(self._apply(span.tag, span.data, None))
                continue

            if start < span.start:
                result.append(self._apply(None, None, line[start:span.start]))
                start = span.start

            subspans: list[RenderSpan] = []
            while i < len(spans) and spans[i].start < span.end:
                subspans.append(spans[i])
                i += 1

            if span.tag == EntityKind.BUTTON:
                # Button content is never styled.
                title = line[span.start:span.end]
                data = dict(span.data or {})
                data["title"] = title
                result.append(self._apply(span.tag, data, title))
            else:
                children = self.for_each(line, start, span.end, subspans)
                result.append(self._apply(span.tag, span.data, children))

            start = span.end

        if start < end:
            result.append(self._apply(None, None, line[start:end]))

        return result


def render(document: Document, formatter: FormatterLike) -> Any:
    """Render a document with a formatter object or callable."""
    return DraftyRenderer(formatter).format(document)
