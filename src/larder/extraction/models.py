"""Canonical data structures shared by all extraction strategies."""

from __future__ import annotations

from dataclasses import dataclass, field

UNTITLED_RECIPE = "Imported recipe (title not found)"


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Markup retrieved from a recipe page together with its address."""

    markup: str
    source_url: str


@dataclass(slots=True)
class IngredientRecord:
    """One parsed ingredient line; every field stays editable downstream."""

    name: str
    amount: float | None = None
    unit: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "amount": self.amount, "unit": self.unit, "notes": self.notes}


@dataclass(slots=True)
class ExtractionCandidate:
    """Raw result of a single strategy before ingredient tokenization."""

    title: str | None = None
    servings: int | None = None
    ingredient_lines: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.ingredient_lines


@dataclass(slots=True)
class RecipePreview:
    """Best-effort structured recipe returned to the caller for confirmation."""

    title: str
    source_url: str
    servings: int | None = None
    ingredients: list[IngredientRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            self.title = UNTITLED_RECIPE
        if self.servings is not None and self.servings <= 0:
            self.servings = None

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "sourceUrl": self.source_url,
            "servings": self.servings,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
        }
