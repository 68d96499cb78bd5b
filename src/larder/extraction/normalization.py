"""Text normalization helpers used by every extraction strategy."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]+>")

# Only the entities recipe pages routinely leak into text; anything else is kept verbatim.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def decode_entities(text: str) -> str:
    """Decode the known markup entities, leaving unknown ones untouched."""

    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_text(text: str | None) -> str:
    """Produce the canonical single-line form of a scraped text fragment."""

    if not text:
        return ""
    return normalize_whitespace(decode_entities(text).replace("\xa0", " "))


def strip_tags(markup: str | None) -> str:
    """Drop inline tags from a markup fragment and normalize the remaining text."""

    if not markup:
        return ""
    return normalize_text(_TAG_RE.sub(" ", markup))
