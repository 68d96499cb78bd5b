"""Shared contract and helpers for per-site extraction rules."""

from __future__ import annotations

import re
from typing import Iterable, Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag

from larder.extraction.models import RecipePreview
from larder.extraction.page import ParsedPage, node_text
from larder.extraction.sections import list_item_texts, mentions_ingredients

_NUMBER_RE = re.compile(r"(\d+)")


@runtime_checkable
class DomainRule(Protocol):
    """Protocol that every site-tuned rule must implement."""

    name: str

    def matches(self, hostname: str) -> bool:
        """Return True when this rule handles the normalized hostname."""

    def extract(
        self,
        markup: str,
        source_url: str,
        fallback_title: str,
        fallback_servings: int | None,
    ) -> RecipePreview:
        """Extract a preview; an empty ingredient list means nothing was found."""

    def refine_title(self, page: ParsedPage, title: str) -> str:
        """Adjust a title detected by the generic strategies."""


class HostnameRule:
    """Base class matching a single registrable domain by substring."""

    name = ""
    domain = ""

    def matches(self, hostname: str) -> bool:
        return bool(self.domain) and self.domain in hostname.lower()

    def refine_title(self, page: ParsedPage, title: str) -> str:
        return title


def first_text(soup: BeautifulSoup, selector: str) -> str | None:
    node = soup.select_one(selector)
    if node is None:
        return None
    return node_text(node) or None


def leading_number(text: str | None) -> int | None:
    if not text:
        return None
    match = _NUMBER_RE.search(text)
    if match is None:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def labelled_servings(soup: BeautifulSoup, tags: Iterable[str]) -> int | None:
    """Number in the last element whose text mentions ``serves`` or ``servings``."""

    servings: int | None = None
    for node in soup.find_all(list(tags)):
        text = node_text(node).lower()
        if "serves" not in text and "servings" not in text:
            continue
        value = leading_number(text)
        if value is not None:
            servings = value
    return servings


def lists_after_headings(soup: BeautifulSoup, heading_tags: Iterable[str], list_tags: Iterable[str]) -> list[str]:
    """Items of the first list following each ingredients heading, concatenated."""

    lines: list[str] = []
    for heading in soup.find_all(list(heading_tags)):
        if not mentions_ingredients(node_text(heading)):
            continue
        container = heading.find_next_sibling(list(list_tags))
        if isinstance(container, Tag):
            lines.extend(list_item_texts(container.find_all("li")))
    return lines

