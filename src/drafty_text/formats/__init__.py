"""Document format handlers for Drafty."""

from drafty_text.formats.base import FormatHandler
from drafty_text.formats.txt_handler import TXTHandler, MarkupFormatter, to_markup
from drafty_text.formats.json_handler import JSONHandler, to_json, from_json
from drafty_text.formats.html_handler import HTMLHandler, HTMLFormatter, to_html
from drafty_text.formats.docx_handler import DOCXHandler, RunFormatter
from drafty_text.formats.console import ConsoleFormatter, to_console_text

__all__ = [
    "FormatHandler",
    "TXTHandler",
    "JSONHandler",
    "HTMLHandler",
    "DOCXHandler",
    "MarkupFormatter",
    "HTMLFormatter",
    "RunFormatter",
    "ConsoleFormatter",
    "to_markup",
    "to_json",
    "from_json",
    "to_html",
    "to_console_text",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".txt": TXTHandler,
    ".md": TXTHandler,
    ".json": JSONHandler,
    ".html": HTMLHandler,
    ".htm": HTMLHandler,
    ".docx": DOCXHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
