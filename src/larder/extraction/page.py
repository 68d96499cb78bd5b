"""Parsed page wrapper shared by strategies and site rules during one extraction."""

from __future__ import annotations

from functools import cached_property
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment, Tag

from larder.extraction.normalization import normalize_whitespace

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

_SERVES_RE = re.compile(r"serves[^0-9]{0,20}(\d+)")
_SERVINGS_RE = re.compile(r"(\d+)[^0-9]{0,10}servings?")
_NON_TEXT_TAGS = ("script", "style", "noscript", "template")


def parse_markup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup or "", "lxml")


def normalize_hostname(url: str) -> str:
    """Lower-cased hostname without a leading ``www.``; empty for unparseable URLs."""

    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    hostname = hostname.lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname


def parsed_text(text: str) -> str:
    """Whitespace-normalize text the parser already entity-decoded."""

    return normalize_whitespace(text.replace("\xa0", " "))


def node_text(node: Tag) -> str:
    return parsed_text(node.get_text(" "))


def is_heading(node: object) -> bool:
    return isinstance(node, Tag) and node.name in HEADING_TAGS


def find_positive_int(pattern: re.Pattern[str], text: str) -> int | None:
    match = pattern.search(text)
    if match is None:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def body_text(soup: BeautifulSoup) -> str:
    """Visible text of the page body, scripts and styles excluded."""

    root = soup.body or soup
    pieces: list[str] = []
    for string in root.find_all(string=True):
        if isinstance(string, Comment):
            continue
        parent = string.parent
        if parent is not None and parent.name in _NON_TEXT_TAGS:
            continue
        pieces.append(str(string))
    return parsed_text(" ".join(pieces))


def servings_from_text(text: str) -> int | None:
    """Scan free text for ``serves 4`` / ``serves: 4`` first, then ``4 servings``."""

    lowered = text.lower()
    servings = find_positive_int(_SERVES_RE, lowered)
    if servings is None:
        servings = find_positive_int(_SERVINGS_RE, lowered)
    return servings


class ParsedPage:
    """Markup parsed once per call; document-level facts are computed lazily."""

    def __init__(self, markup: str, source_url: str) -> None:
        self.markup = markup
        self.source_url = source_url
        self.soup = parse_markup(markup)

    @cached_property
    def hostname(self) -> str:
        return normalize_hostname(self.source_url)

    @cached_property
    def meta_title(self) -> str | None:
        """``og:title`` content, else the ``<title>`` text."""

        og_title = self.soup.find("meta", attrs={"property": "og:title"})
        if isinstance(og_title, Tag):
            content = parsed_text(str(og_title.get("content") or ""))
            if content:
                return content

        title_tag = self.soup.find("title")
        if isinstance(title_tag, Tag):
            title = node_text(title_tag)
            if title:
                return title
        return None

    @cached_property
    def body_text(self) -> str:
        return body_text(self.soup)

    @cached_property
    def body_servings(self) -> int | None:
        return servings_from_text(self.body_text)

    @cached_property
    def headings(self) -> list[Tag]:
        return self.soup.find_all(list(HEADING_TAGS))

    def fallback_title(self) -> str:
        return self.meta_title or self.source_url

    @cached_property
    def elements(self) -> list[Tag]:
        """Every element of the document in pre-order; list indices act as positions."""

        return self.soup.find_all(True)
