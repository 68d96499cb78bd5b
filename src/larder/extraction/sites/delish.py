"""Rule for delish.com pages."""

from __future__ import annotations

from larder.extraction.sites.simplyrecipes import SimplyRecipesRule


class DelishRule(SimplyRecipesRule):
    """Same list layout as simplyrecipes, but servings labels may sit in spans and paragraphs."""

    name = "delish"
    domain = "delish.com"
    servings_tags = ("div", "span", "p")
