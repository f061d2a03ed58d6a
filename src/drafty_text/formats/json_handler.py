"""Drafty JSON wire format handler."""

import json
from pathlib import Path
from typing import Optional

from drafty_text.config import get_settings
from drafty_text.formats.base import FormatHandler
from drafty_text.formatting.ir import Document


def to_json(document: Document, indent: Optional[int] = None) -> str:
    """Serialize a Document to its JSON wire form."""
    if indent is None:
        indent = get_settings().json_indent
    return json.dumps(document.to_dict(), indent=indent or None, ensure_ascii=False)


def from_json(content: str) -> Document:
    """Deserialize a Document from its JSON wire form."""
    return Document.from_dict(json.loads(content))


class JSONHandler(FormatHandler):
    """Handler for Drafty documents stored as JSON (.json)."""

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".json",)

    def read(self, path: Path) -> Document:
        """Read a document from its JSON form."""
        return from_json(path.read_text(encoding="utf-8"))

    def write(self, document: Document, path: Path) -> None:
        """Write a document as JSON."""
        path.write_text(to_json(document), encoding="utf-8")
