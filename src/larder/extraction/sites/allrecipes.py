"""Rule for allrecipes.com structured-ingredient components."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from larder.extraction.ingredients import parse_ingredient_lines
from larder.extraction.models import RecipePreview
from larder.extraction.page import ParsedPage, node_text
from larder.extraction.sections import list_item_texts
from larder.extraction.sites.base import HostnameRule, first_text, leading_number


def _servings_control(soup: BeautifulSoup) -> int | None:
    servings_input = soup.select_one("input#servings")
    if isinstance(servings_input, Tag):
        value = leading_number(str(servings_input.get("value") or ""))
        if value is not None:
            return value
    return leading_number(first_text(soup, "div.recipe-adjust-servings__size"))


def _servings_detail(soup: BeautifulSoup) -> int | None:
    for value_node in soup.select("div.mntl-recipe-details__value"):
        label = value_node.find_previous_sibling(True)
        if label is not None and "servings" in node_text(label).lower():
            return leading_number(node_text(value_node))
    return None


class AllRecipesRule(HostnameRule):
    name = "allrecipes"
    domain = "allrecipes.com"

    def extract(
        self,
        markup: str,
        source_url: str,
        fallback_title: str,
        fallback_servings: int | None,
    ) -> RecipePreview:
        soup = ParsedPage(markup, source_url).soup

        title = first_text(soup, "h1") or fallback_title
        servings = _servings_control(soup) or _servings_detail(soup) or fallback_servings

        lines = list_item_texts(soup.select("ul.mntl-structured-ingredients__list li"))
        if not lines:
            # pre-2022 layout
            lines = [node_text(span) for span in soup.select("span.ingredients-item-name")]
            lines = [line for line in lines if line]

        return RecipePreview(
            title=title,
            source_url=source_url,
            servings=servings,
            ingredients=parse_ingredient_lines(lines),
        )
