"""Parsing, rendering and mutation of Drafty documents."""

from drafty_text.formatting.ir import (
    MIME_TYPE,
    JSON_MIME_TYPE,
    Style,
    EntityKind,
    FormatRange,
    StyleRange,
    EntityRange,
    Entity,
    Document,
)
from drafty_text.formatting.parser import DraftyParser, parse
from drafty_text.formatting.renderer import DraftyRenderer, Formatter, render
from drafty_text.formatting.mutators import (
    DraftyError,
    IllegalArgumentError,
    InvalidIndexError,
    insert_image,
    attach_file,
    attach_json,
    insert_button,
)

__all__ = [
    "MIME_TYPE",
    "JSON_MIME_TYPE",
    "Style",
    "EntityKind",
    "FormatRange",
    "StyleRange",
    "EntityRange",
    "Entity",
    "Document",
    "DraftyParser",
    "parse",
    "DraftyRenderer",
    "Formatter",
    "render",
    "DraftyError",
    "IllegalArgumentError",
    "InvalidIndexError",
    "insert_image",
    "attach_file",
    "attach_json",
    "insert_button",
]
