"""Recipe extraction pipeline interfaces."""

from .extractor import InvalidRecipeUrlError, RecipeExtractor, extract_recipe, validate_source_url
from .models import UNTITLED_RECIPE, ExtractionCandidate, IngredientRecord, RawDocument, RecipePreview

__all__ = [
    "ExtractionCandidate",
    "IngredientRecord",
    "InvalidRecipeUrlError",
    "RawDocument",
    "RecipeExtractor",
    "RecipePreview",
    "UNTITLED_RECIPE",
    "extract_recipe",
    "validate_source_url",
]
