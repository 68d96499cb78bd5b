from __future__ import annotations

import pytest

from larder.extraction.models import RecipePreview
from larder.extraction.page import ParsedPage
from larder.extraction.sites import (
    AllRecipesRule,
    DelishRule,
    DomainRule,
    DomainRuleRegistry,
    JoshuaWeissmanRule,
    SimplyRecipesRule,
    build_default_rules,
)


def test_default_registry_contains_all_site_rules() -> None:
    registry = build_default_rules()

    assert registry.names == ("allrecipes", "simplyrecipes", "delish", "joshuaweissman")
    assert all(isinstance(rule, DomainRule) for rule in registry)


@pytest.mark.parametrize(
    ("hostname", "expected"),
    [
        ("www.allrecipes.com", "allrecipes"),
        ("ALLRECIPES.COM", "allrecipes"),
        ("simplyrecipes.com", "simplyrecipes"),
        ("www.delish.com", "delish"),
        ("joshuaweissman.com", "joshuaweissman"),
        ("example.com", None),
        ("", None),
    ],
)
def test_registry_matches_hostname_substrings(hostname: str, expected: str | None) -> None:
    rule = build_default_rules().find(hostname)

    assert (rule.name if rule else None) == expected


def test_registry_resolves_urls() -> None:
    rule = build_default_rules().find_for_url("https://www.delish.com/cooking/recipe-ideas/a1/chili/")

    assert isinstance(rule, DelishRule)


def test_registry_rejects_duplicate_names() -> None:
    with pytest.raises(ValueError, match="Duplicate"):
        DomainRuleRegistry([DelishRule(), DelishRule()])


def test_allrecipes_reads_structured_ingredient_list_and_servings_input() -> None:
    markup = (
        "<html><body><h1>World's Best Lasagna</h1>"
        '<input id="servings" value="12"/>'
        '<ul class="mntl-structured-ingredients__list">'
        "<li><span>1</span> <span>pound</span> <span>sweet Italian sausage</span></li>"
        "<li>2 cloves garlic</li></ul></body></html>"
    )

    preview = AllRecipesRule().extract(markup, "https://www.allrecipes.com/recipe/1", "Fallback", None)

    assert preview.title == "World's Best Lasagna"
    assert preview.servings == 12
    assert [(i.amount, i.unit, i.name) for i in preview.ingredients] == [
        (1.0, "pound", "sweet Italian sausage"),
        (2.0, "cloves", "garlic"),
    ]


def test_allrecipes_falls_back_to_legacy_spans_and_details_row() -> None:
    markup = (
        "<html><body>"
        '<div class="mntl-recipe-details__item"><div class="mntl-recipe-details__label">Servings:</div>'
        '<div class="mntl-recipe-details__value">8</div></div>'
        '<span class="ingredients-item-name">3 cups milk</span>'
        '<span class="ingredients-item-name"> </span>'
        "</body></html>"
    )

    preview = AllRecipesRule().extract(markup, "https://allrecipes.com/recipe/2", "Fallback Title", 4)

    assert preview.title == "Fallback Title"
    assert preview.servings == 8
    assert [i.name for i in preview.ingredients] == ["milk"]


def test_allrecipes_returns_empty_list_when_nothing_found() -> None:
    preview = AllRecipesRule().extract("<html><body></body></html>", "https://allrecipes.com/x", "T", 2)

    assert isinstance(preview, RecipePreview)
    assert preview.ingredients == []
    assert preview.servings == 2


def test_simplyrecipes_uses_list_after_ingredients_heading() -> None:
    markup = (
        "<html><body><h1>Guacamole</h1>"
        "<div class='meta'><div>Servings: 4</div></div>"
        "<h2>Guacamole Ingredients</h2><p>You will need</p>"
        "<ul><li>2 ripe avocados</li><li>1 tablespoon lime juice</li></ul>"
        "<h2>Method</h2><ul><li>Mash</li></ul></body></html>"
    )

    preview = SimplyRecipesRule().extract(markup, "https://www.simplyrecipes.com/guac", "Fallback", None)

    assert preview.title == "Guacamole"
    assert preview.servings == 4
    assert [(i.unit, i.name) for i in preview.ingredients] == [("ripe", "avocados"), ("tablespoon", "lime juice")]


def test_delish_reads_servings_from_spans() -> None:
    markup = (
        "<html><body><h1>Chili</h1><p>Yields: <span>6 servings</span></p>"
        "<h3>Ingredients</h3><ul><li>1 lb beef</li></ul></body></html>"
    )

    preview = DelishRule().extract(markup, "https://www.delish.com/chili", "Fallback", None)

    assert preview.servings == 6
    assert preview.ingredients[0].unit == "lb"


def test_joshuaweissman_walks_siblings_until_directions() -> None:
    markup = (
        "<html><body><h1>Get notified about new recipes</h1><h1>Perfect Burger</h1>"
        "<p>This burger serves 4 people.</p>"
        "<h2>Ingredients</h2>"
        "<div><ul><li>1 lb ground chuck</li></ul></div>"
        "<div><ul><li>4 buns</li></ul></div>"
        "<h2>Directions</h2><div><ul><li>Grill</li></ul></div>"
        "</body></html>"
    )

    preview = JoshuaWeissmanRule().extract(
        markup,
        "https://www.joshuaweissman.com/post/burger",
        "Get Notified About New Recipes",
        None,
    )

    assert preview.title == "Perfect Burger"
    assert preview.servings == 4
    assert [i.name for i in preview.ingredients] == ["ground chuck", "buns"]


def test_joshuaweissman_prefers_fallback_title_and_servings() -> None:
    markup = "<html><body><h1>Page Heading</h1><h2>Ingredients</h2><ul><li>salt</li></ul></body></html>"

    preview = JoshuaWeissmanRule().extract(markup, "https://joshuaweissman.com/p", "Meta Title", 3)

    assert preview.title == "Meta Title"
    assert preview.servings == 3
    assert [i.name for i in preview.ingredients] == ["salt"]


def test_newsletter_title_kept_when_no_alternative_heading() -> None:
    page = ParsedPage("<html><body><h1>Get notified about new recipes</h1></body></html>", "https://joshuaweissman.com/p")

    assert JoshuaWeissmanRule().refine_title(page, "Get notified about new recipes") == "Get notified about new recipes"


def test_other_rules_leave_titles_alone() -> None:
    page = ParsedPage("<html><body><h1>Other</h1></body></html>", "https://delish.com/p")

    assert DelishRule().refine_title(page, "Get notified about new recipes") == "Get notified about new recipes"
