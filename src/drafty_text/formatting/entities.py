"""Extraction of links, mentions and hashtags from clean text."""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple

from drafty_text.formatting.ir import EntityKind


@dataclass
class ExtractedEntity:
    """Entity occurrence found in a line.

    Attributes:
        at: Offset of the match in the clean line
        length: Length of the match
        kind: Entity tag
        value: The raw matched text, used as the dedup key
        data: Entity payload built by the rule
    """

    at: int
    length: int
    kind: str
    value: str
    data: dict[str, Any] = field(default_factory=dict)


class EntityRule(NamedTuple):
    kind: str
    pattern: re.Pattern
    pack: Callable[[re.Match], dict[str, Any]]


def _pack_link(m: re.Match) -> dict[str, Any]:
    # Group 1 is the scheme.
    url = m.group(0) if m.group(1) else "http://" + m.group(0)
    return {"url": url}


def _pack_value(m: re.Match) -> dict[str, Any]:
    return {"val": m.group(0)}


# Earlier rules take priority.
ENTITY_RULES: tuple[EntityRule, ...] = (
    EntityRule(
        EntityKind.LINK,
        re.compile(
            r"(?<!\w)(https?://)?(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}"
            r"\.[a-z]{2,4}\b(?:[-a-zA-Z0-9@:%_+.~#?&/=]*)"
        ),
        _pack_link,
    ),
    EntityRule(EntityKind.MENTION, re.compile(r"\B@(\w\w+)"), _pack_value),
    EntityRule(EntityKind.HASHTAG, re.compile(r"(?<![^\s,.!])#(\w\w+)"), _pack_value),
)


def extract_entities(line: str) -> list[ExtractedEntity]:
    """Find entity occurrences in a line already cleared of markup.

    Matches of different rules are not checked against each other, so a
    line may yield overlapping occurrences.
    """
    extracted: list[ExtractedEntity] = []
    for rule in ENTITY_RULES:
        for m in rule.pattern.finditer(line):
            value = m.group(0)
            extracted.append(
                ExtractedEntity(
                    at=m.start(0),
                    length=len(value),
                    kind=rule.kind,
                    value=value,
                    data=rule.pack(m),
                )
            )
    return extracted
