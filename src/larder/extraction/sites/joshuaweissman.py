"""Rule for joshuaweissman.com, whose pages lead with a newsletter banner."""

from __future__ import annotations

import re

from larder.extraction.ingredients import parse_ingredient_lines
from larder.extraction.models import RecipePreview
from larder.extraction.page import ParsedPage, find_positive_int, node_text
from larder.extraction.sections import mentions_ingredients, walk_section_siblings
from larder.extraction.sites.base import HostnameRule, first_text

NEWSLETTER_BANNER_RE = re.compile(r"get notified about new recipes", re.IGNORECASE)

_SERVINGS_PATTERNS = (
    re.compile(r"serves\s+(\d+)"),
    re.compile(r"serves:\s*(\d+)"),
    re.compile(r"(\d+)\s+servings?"),
)


class JoshuaWeissmanRule(HostnameRule):
    name = "joshuaweissman"
    domain = "joshuaweissman.com"

    def refine_title(self, page: ParsedPage, title: str) -> str:
        """Swap the newsletter banner for the first real ``<h1>`` on the page."""

        if not NEWSLETTER_BANNER_RE.search(title):
            return title

        h1_texts = [text for text in (node_text(h1) for h1 in page.soup.find_all("h1")) if text]
        replacement = next((text for text in h1_texts if not NEWSLETTER_BANNER_RE.search(text)), None)
        if replacement is None and len(h1_texts) > 1:
            replacement = h1_texts[1]
        return replacement or title

    def extract(
        self,
        markup: str,
        source_url: str,
        fallback_title: str,
        fallback_servings: int | None,
    ) -> RecipePreview:
        page = ParsedPage(markup, source_url)

        title = fallback_title.strip() if fallback_title else ""
        if not title:
            title = first_text(page.soup, "h1") or ""
        title = self.refine_title(page, title)

        servings = self._servings(page)
        if servings is None:
            servings = fallback_servings

        lines: list[str] = []
        section_headings = [heading for heading in page.headings if mentions_ingredients(node_text(heading))]
        if section_headings:
            lines = walk_section_siblings(section_headings[-1])

        return RecipePreview(
            title=title,
            source_url=source_url,
            servings=servings,
            ingredients=parse_ingredient_lines(lines),
        )

    def _servings(self, page: ParsedPage) -> int | None:
        text = page.body_text.lower()
        for pattern in _SERVINGS_PATTERNS:
            servings = find_positive_int(pattern, text)
            if servings is not None:
                return servings
        return None
