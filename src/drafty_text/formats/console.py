"""Terminal rendering with rich."""

from typing import Optional

from rich.text import Text

from drafty_text.formatting.ir import JSON_MIME_TYPE, Content, Document, EntityKind, Style
from drafty_text.formatting.renderer import render


# rich styles of inline tags
CONSOLE_STYLES = {
    Style.BOLD: "bold",
    Style.ITALIC: "italic",
    Style.STRIKETHROUGH: "strike",
    Style.CODE: "bold magenta",
    EntityKind.MENTION: "cyan",
    EntityKind.HASHTAG: "cyan",
}


class ConsoleFormatter:
    """Formats a document as ``rich.text.Text``."""

    def apply(self, tag: Optional[str], data: Optional[dict], content: Content) -> Text:
        data = data or {}
        text = Text()
        if isinstance(content, str):
            text.append(content)
        elif content is not None:
            for node in content:
                text.append(node)

        if tag is None:
            return text
        if tag in CONSOLE_STYLES:
            text.stylize(CONSOLE_STYLES[tag])
            return text
        if tag == Style.LINE_BREAK:
            return Text("\n")
        if tag == EntityKind.LINK:
            url = data.get("url")
            text.stylize(f"underline blue link {url}" if url else "underline blue")
            return text
        if tag == EntityKind.IMAGE:
            return Text(f"[image: {data.get('name') or 'untitled'}]", style="dim")
        if tag == EntityKind.ATTACHMENT:
            if data.get("mime") == JSON_MIME_TYPE:
                return Text()
            return Text(f"\n[attachment: {data.get('name') or 'untitled'}]", style="dim")
        if tag == EntityKind.BUTTON:
            return Text(f"[ {content} ]", style="reverse")
        # HD
        return Text()


def to_console_text(document: Document) -> Text:
    """Render a Document for the terminal."""
    return render(document, ConsoleFormatter())
