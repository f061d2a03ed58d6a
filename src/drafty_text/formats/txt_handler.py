"""Inline markup text file handler."""

from pathlib import Path
from typing import Optional

from drafty_text.formats.base import FormatHandler, join_content
from drafty_text.formatting.ir import Content, Document, Style
from drafty_text.formatting.parser import parse
from drafty_text.formatting.renderer import render


# Delimiters of the inline styles
MARKUP_DELIMITERS = {
    Style.BOLD: "*",
    Style.ITALIC: "_",
    Style.STRIKETHROUGH: "~",
    Style.CODE: "`",
}


class MarkupFormatter:
    """Formats a document back into inline markup.

    Entities keep their text, out-of-band elements are dropped.
    """

    def apply(self, tag: Optional[str], data: Optional[dict], content: Content) -> str:
        if content is None:
            return ""
        text = join_content(content)
        if tag == Style.LINE_BREAK:
            return "\n"
        delim = MARKUP_DELIMITERS.get(tag or "")
        if delim and text:
            return f"{delim}{text}{delim}"
        return text


def to_markup(document: Document) -> str:
    """Convert a Document to inline markup text."""
    return render(document, MarkupFormatter())


class TXTHandler(FormatHandler):
    """Handler for plain text (.txt, .md) files.

    Text files carry formatting as inline markup:
    - *bold*
    - _italic_
    - ~strikethrough~
    - `monospace`
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt", ".md")

    def read(self, path: Path) -> Document:
        """Read markup text from file and parse it."""
        return parse(path.read_text(encoding="utf-8"))

    def write(self, document: Document, path: Path) -> None:
        """Write document as inline markup text."""
        path.write_text(to_markup(document), encoding="utf-8")
