"""Programmatic insertion of entities into a document.

Every mutator validates its arguments first and only then appends one
range and one entity, so a failed call leaves the document unchanged.
Mutators return the document to allow chaining.
"""

from typing import Any, Optional

from drafty_text.formatting.ir import (
    BUTTON_ACTIONS,
    JSON_MIME_TYPE,
    Document,
    Entity,
    EntityKind,
    EntityRange,
)


class DraftyError(Exception):
    """Base class for document mutation errors."""

    pass


class IllegalArgumentError(DraftyError):
    """A required argument is missing or has an unsupported value."""

    pass


class InvalidIndexError(DraftyError):
    """An insertion offset is outside of the document text."""

    pass


def _append_entity(
    document: Document, at: int, length: int, kind: str, data: dict[str, Any]
) -> Document:
    if document.ranges is None:
        document.ranges = []
    if document.entities is None:
        document.entities = []
    document.ranges.append(EntityRange(at, length, len(document.entities)))
    document.entities.append(Entity(kind=kind, data=data))
    return document


def insert_image(
    document: Document,
    at: int,
    *,
    mime: Optional[str] = None,
    bits: Optional[bytes] = None,
    width: int = 0,
    height: int = 0,
    fname: Optional[str] = None,
    refurl: Optional[str] = None,
    size: int = 0,
) -> Document:
    """Insert an inline image.

    Args:
        document: Document to modify
        at: Offset of the character the image replaces
        mime: Content type, such as 'image/jpeg'
        bits: Image content
        width: Image width in pixels
        height: Image height in pixels
        fname: File name to suggest to the receiver
        refurl: Reference to the full image
        size: File size hint in bytes

    Raises:
        IllegalArgumentError: If neither bits nor refurl is given
        InvalidIndexError: If ``at`` is outside of the text
    """
    if bits is None and refurl is None:
        raise IllegalArgumentError("Either image bits or reference URL must not be None.")
    if not 0 <= at < len(document.plain_text):
        raise InvalidIndexError(f"Invalid insertion position: {at}")

    data: dict[str, Any] = {}
    if mime:
        data["mime"] = mime
    if bits is not None:
        data["val"] = bits
    data["width"] = width
    data["height"] = height
    if fname:
        data["name"] = fname
    if refurl is not None:
        data["ref"] = refurl
    if size > 0:
        data["size"] = size

    return _append_entity(document, at, 1, EntityKind.IMAGE, data)


def attach_file(
    document: Document,
    *,
    mime: Optional[str] = None,
    bits: Optional[bytes] = None,
    fname: Optional[str] = None,
    refurl: Optional[str] = None,
    size: Optional[int] = None,
) -> Document:
    """Attach a file out-of-band, either in-band bytes or a reference.

    Raises:
        IllegalArgumentError: If neither bits nor refurl is given
    """
    if bits is None and refurl is None:
        raise IllegalArgumentError("Either file bits or reference URL must not be None.")
    if size is None:
        size = len(bits) if bits is not None else 0

    data: dict[str, Any] = {}
    if mime:
        data["mime"] = mime
    if bits is not None:
        data["val"] = bits
    if fname:
        data["name"] = fname
    if refurl is not None:
        data["ref"] = refurl
    if size > 0:
        data["size"] = size

    return _append_entity(document, -1, 1, EntityKind.ATTACHMENT, data)


def attach_json(document: Document, payload: dict[str, Any]) -> Document:
    """Attach an object as JSON, e.g. a form response."""
    data = {"mime": JSON_MIME_TYPE, "val": payload}
    return _append_entity(document, -1, 1, EntityKind.ATTACHMENT, data)


def insert_button(
    document: Document,
    at: int,
    length: int,
    *,
    name: Optional[str] = None,
    action_type: str,
    action_value: Optional[str] = None,
    ref_url: Optional[str] = None,
) -> Document:
    """Turn ``length`` characters at ``at`` into a button.

    Args:
        document: Document to modify
        at: Offset of the button title
        length: Length of the button title
        name: Opaque button ID returned to the server on click
        action_type: 'url' to open ``ref_url``, 'pub' to send a response
        action_value: Value sent with a 'pub' response
        ref_url: URL to open, required for 'url' buttons

    Raises:
        IllegalArgumentError: On unknown action type or missing URL
    """
    if action_type not in BUTTON_ACTIONS:
        raise IllegalArgumentError(f"Unknown action type {action_type!r}")
    if action_type == "url" and ref_url is None:
        raise IllegalArgumentError("URL required for URL buttons")

    data: dict[str, Any] = {"act": action_type}
    if name:
        data["name"] = name
    if action_value:
        data["val"] = action_value
    if action_type == "url":
        data["ref"] = ref_url

    return _append_entity(document, at, length, EntityKind.BUTTON, data)
