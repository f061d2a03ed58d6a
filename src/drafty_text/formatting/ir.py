"""Document model for Drafty formatted text.

A document is a triple of plain text, a flat list of format ranges over
that text and a list of entities the ranges may point at. This module also
holds the transient structures used while parsing and rendering and the
structural mapping to the JSON wire form (``txt``/``fmt``/``ent``).
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Union


MIME_TYPE = "text/x-drafty"
JSON_MIME_TYPE = "application/json"


# =============================================================================
# Tags
# =============================================================================

class Style:
    """Inline style tags."""

    BOLD = "ST"
    ITALIC = "EM"
    STRIKETHROUGH = "DL"
    CODE = "CO"
    LINE_BREAK = "BR"
    HIDDEN = "HD"  # Fallback for ranges which cannot be resolved


class EntityKind:
    """Entity tags."""

    LINK = "LN"
    MENTION = "MN"
    HASHTAG = "HT"
    IMAGE = "IM"
    ATTACHMENT = "EX"
    BUTTON = "BN"


BUTTON_ACTIONS = ("url", "pub")


# =============================================================================
# Persisted model
# =============================================================================

@dataclass(frozen=True)
class FormatRange(ABC):
    """A range of the document text.

    Attributes:
        offset: Start of the range in the clean text, -1 if out-of-band
        length: Number of characters covered
    """

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @abstractmethod
    def shifted(self, delta: int) -> "FormatRange":
        """Copy of the range moved by ``delta`` characters."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Wire form of the range."""

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "FormatRange":
        """Build a range from its wire form.

        A blank or missing ``tp`` means the range references an entity.
        """
        at = data.get("at") or 0
        length = data.get("len") or 0
        tp = data.get("tp")
        if tp:
            return StyleRange(at, length, tp)
        return EntityRange(at, length, data.get("key") or 0)


@dataclass(frozen=True)
class StyleRange(FormatRange):
    """Inline style span such as bold or a line break."""

    style: str

    def shifted(self, delta: int) -> "StyleRange":
        return StyleRange(self.offset + delta, self.length, self.style)

    def to_dict(self) -> dict[str, Any]:
        return {"at": self.offset, "len": self.length, "tp": self.style}


@dataclass(frozen=True)
class EntityRange(FormatRange):
    """Anchor pointing at ``Document.entities[key]``."""

    key: int

    def shifted(self, delta: int) -> "EntityRange":
        return EntityRange(self.offset + delta, self.length, self.key)

    def to_dict(self) -> dict[str, Any]:
        return {"at": self.offset, "len": self.length, "key": self.key}


@dataclass
class Entity:
    """Typed payload referenced by one or more ranges.

    Attributes:
        kind: Entity tag (LN, MN, HT, IM, EX, BN)
        data: Render-dependent payload (url, bytes, dimensions, ...)
    """

    kind: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"tp": self.kind, "data": _encode_value(self.data)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entity":
        payload = data.get("data") or {}
        # Binary content arrives base64-encoded.
        if data.get("tp") in (EntityKind.IMAGE, EntityKind.ATTACHMENT):
            val = payload.get("val")
            if isinstance(val, str) and payload.get("mime") != JSON_MIME_TYPE:
                payload = {**payload, "val": base64.b64decode(val)}
        return cls(kind=data.get("tp") or "", data=payload)


@dataclass
class Document:
    """Formatted text: clean text, format ranges and entities.

    ``ranges`` and ``entities`` are None when there is nothing to store.
    Every ``EntityRange.key`` is expected to index into ``entities``.
    """

    text: str = ""
    ranges: Optional[list[FormatRange]] = None
    entities: Optional[list[Entity]] = None

    @classmethod
    def from_markup(cls, content: str) -> "Document":
        """Parse inline markup into a document."""
        from drafty_text.formatting.parser import parse

        return parse(content)

    @property
    def plain_text(self) -> str:
        """Get the text content without formatting."""
        return self.text or ""

    def is_plain(self) -> bool:
        """Check if the document has no formatting or entities at all."""
        return not self.ranges and not self.entities

    def entity_for(self, rng: FormatRange) -> Optional[Entity]:
        """Get the entity a range points at, if any."""
        if not isinstance(rng, EntityRange) or not self.entities:
            return None
        if 0 <= rng.key < len(self.entities):
            return self.entities[rng.key]
        return None

    def entity_references(self) -> Optional[list[str]]:
        """Collect the ``ref`` URLs of all entities.

        Returns:
            List of reference URLs or None if no entity carries one
        """
        refs = [
            ent.data["ref"]
            for ent in self.entities or []
            if ent.data.get("ref")
        ]
        return refs or None

    def attachments(self) -> list[Entity]:
        """Get out-of-band file attachments in range order."""
        result: list[Entity] = []
        for rng in self.ranges or []:
            if rng.offset != -1:
                continue
            ent = self.entity_for(rng)
            if ent is not None and ent.kind == EntityKind.ATTACHMENT:
                result.append(ent)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON wire form, omitting empty parts."""
        out: dict[str, Any] = {"txt": self.plain_text}
        if self.ranges:
            out["fmt"] = [rng.to_dict() for rng in self.ranges]
        if self.entities:
            out["ent"] = [ent.to_dict() for ent in self.entities]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Build a document from the JSON wire form."""
        ranges = [FormatRange.from_dict(r) for r in data.get("fmt") or []]
        entities = [Entity.from_dict(e) for e in data.get("ent") or []]
        return cls(
            text=data.get("txt") or "",
            ranges=ranges or None,
            entities=entities or None,
        )


def _encode_value(value: Any) -> Any:
    """Make entity payloads JSON-safe (bytes become base64)."""
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {k: _encode_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_encode_value(v) for v in value]
    return value


# =============================================================================
# Transient parse structures
# =============================================================================

@dataclass
class Span:
    """Markup region detected in a raw line.

    Attributes:
        start: Index of the opening delimiter
        end: Index of the closing delimiter
        style: Style tag of the rule that matched
        text: Captured content, delimiters excluded
        children: Spans fully contained in this one
    """

    start: int
    end: int
    style: str
    text: str = ""
    children: list["Span"] = field(default_factory=list)


@dataclass
class Chunk:
    """Markup-free fragment of a line.

    A chunk is either plain text (``style`` is None) or a styled node whose
    content is ``text`` or, when nested markup was found, ``children``.
    """

    text: str = ""
    style: Optional[str] = None
    children: list["Chunk"] = field(default_factory=list)


@dataclass
class Block:
    """One parsed line: clean text and its ranges."""

    text: str
    ranges: list[FormatRange] = field(default_factory=list)


Content = Union[None, str, list]
