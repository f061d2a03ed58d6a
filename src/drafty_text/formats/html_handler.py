"""HTML file handler."""

import base64
from html import escape
from pathlib import Path
from typing import Any, Optional

from drafty_text.formats.base import FormatHandler, join_content
from drafty_text.formatting.ir import (
    JSON_MIME_TYPE,
    Content,
    Document,
    EntityKind,
    Style,
)
from drafty_text.formatting.renderer import render


# Tags which map directly onto an HTML element
HTML_TAGS = {
    Style.BOLD: "b",
    Style.ITALIC: "i",
    Style.STRIKETHROUGH: "del",
    Style.CODE: "tt",
}


class HTMLFormatter:
    """Formats a document as an HTML fragment.

    Leaf text is escaped as it enters the tree; nested content is already
    HTML and is joined as is.
    """

    def apply(self, tag: Optional[str], data: Optional[dict], content: Content) -> str:
        inner = escape(content) if isinstance(content, str) else join_content(content)
        data = data or {}

        if tag is None:
            return inner
        if tag in HTML_TAGS:
            el = HTML_TAGS[tag]
            return f"<{el}>{inner}</{el}>"
        if tag == Style.LINE_BREAK:
            return "<br/>"
        if tag == EntityKind.LINK:
            return f'<a href="{escape(str(data.get("url", "")))}">{inner}</a>'
        if tag == EntityKind.MENTION:
            return f'<span class="mention">{inner}</span>'
        if tag == EntityKind.HASHTAG:
            return f'<span class="hashtag">{inner}</span>'
        if tag == EntityKind.IMAGE:
            return self._image(data)
        if tag == EntityKind.ATTACHMENT:
            return self._attachment(data)
        if tag == EntityKind.BUTTON:
            return self._button(data, inner)
        # HD and unknown tags are not shown.
        return ""

    def _image(self, data: dict[str, Any]) -> str:
        src = _source_url(data)
        attrs = [f'src="{escape(src)}"']
        if data.get("name"):
            attrs.append(f'alt="{escape(data["name"])}"')
        if data.get("width"):
            attrs.append(f'width="{int(data["width"])}"')
        if data.get("height"):
            attrs.append(f'height="{int(data["height"])}"')
        return f"<img {' '.join(attrs)}/>"

    def _attachment(self, data: dict[str, Any]) -> str:
        if data.get("mime") == JSON_MIME_TYPE:
            # Form response, not meant for display.
            return ""
        name = data.get("name") or "attachment"
        href = escape(_source_url(data))
        return f'<a class="attachment" href="{href}" download="{escape(name)}">{escape(name)}</a>'

    def _button(self, data: dict[str, Any], title: str) -> str:
        attrs = [f'data-act="{escape(str(data.get("act", "")))}"']
        if data.get("name"):
            attrs.append(f'name="{escape(data["name"])}"')
        if data.get("val"):
            attrs.append(f'value="{escape(data["val"])}"')
        if data.get("ref"):
            attrs.append(f'data-ref="{escape(data["ref"])}"')
        return f"<button {' '.join(attrs)}>{title}</button>"


def _source_url(data: dict[str, Any]) -> str:
    """URL of inline or referenced content."""
    val = data.get("val")
    if isinstance(val, (bytes, bytearray)):
        mime = data.get("mime") or "application/octet-stream"
        return f"data:{mime};base64,{base64.b64encode(bytes(val)).decode('ascii')}"
    return str(data.get("ref") or "")


def to_html(document: Document) -> str:
    """Convert a Document to an HTML fragment."""
    return render(document, HTMLFormatter())


class HTMLHandler(FormatHandler):
    """Handler for HTML (.html) output. Write-only."""

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".html", ".htm")

    def write(self, document: Document, path: Path) -> None:
        """Write document as a standalone HTML page."""
        body = to_html(document)
        page = (
            "<!DOCTYPE html>\n"
            '<html><head><meta charset="utf-8"/></head>\n'
            f"<body><p>{body}</p></body></html>\n"
        )
        path.write_text(page, encoding="utf-8")
