"""Rule for simplyrecipes.com pages."""

from __future__ import annotations

from larder.extraction.ingredients import parse_ingredient_lines
from larder.extraction.models import RecipePreview
from larder.extraction.page import ParsedPage
from larder.extraction.sites.base import HostnameRule, first_text, labelled_servings, lists_after_headings


class SimplyRecipesRule(HostnameRule):
    """Servings live in a labelled data row; ingredients in lists under h2/h3 headings."""

    name = "simplyrecipes"
    domain = "simplyrecipes.com"
    servings_tags: tuple[str, ...] = ("div",)

    def extract(
        self,
        markup: str,
        source_url: str,
        fallback_title: str,
        fallback_servings: int | None,
    ) -> RecipePreview:
        soup = ParsedPage(markup, source_url).soup

        title = first_text(soup, "h1") or fallback_title
        servings = labelled_servings(soup, self.servings_tags)
        if servings is None:
            servings = fallback_servings
        lines = lists_after_headings(soup, ("h2", "h3"), ("ul",))

        return RecipePreview(
            title=title,
            source_url=source_url,
            servings=servings,
            ingredients=parse_ingredient_lines(lines),
        )
