"""JSON-LD recipe metadata extraction with lenient parsing of broken blocks."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from bs4 import Tag

from larder.extraction.models import ExtractionCandidate
from larder.extraction.normalization import strip_tags
from larder.extraction.page import ParsedPage

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"

_ADJACENT_OBJECTS_RE = re.compile(r"}\s*{")
_NUMBER_RE = re.compile(r"(\d+)")

_TITLE_KEYS = ("name", "headline", "alternateName")
_SERVINGS_KEYS = ("recipeYield", "recipeServings", "yield")
_INGREDIENT_KEYS = ("recipeIngredient", "ingredients")


def parse_json_ld(raw: str) -> Any | None:
    """Parse a JSON-LD block, repairing concatenated top-level objects once.

    Some sites emit ``{...}{...}`` inside a single script. The repair pass wraps
    the block in an array and inserts commas between adjacent objects.
    """

    text = raw.strip()
    if not text:
        return None

    try:
        return json.loads(text)
    except ValueError:
        pass

    repaired = "[" + _ADJACENT_OBJECTS_RE.sub("},{", text) + "]"
    try:
        return json.loads(repaired)
    except ValueError as exc:
        logger.debug("Skipping unparseable JSON-LD block: %s", exc)
        return None


def _is_recipe_type(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "recipe"
    if isinstance(value, list):
        return any(isinstance(entry, str) and entry.strip().lower() == "recipe" for entry in value)
    return False


def find_recipe_nodes(node: object, results: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
    """Collect every object typed ``Recipe`` in depth-first document order."""

    if results is None:
        results = []

    if isinstance(node, list):
        for item in node:
            find_recipe_nodes(item, results)
    elif isinstance(node, dict):
        if _is_recipe_type(node.get("@type")):
            results.append(node)
        # @graph, mainEntity, mainEntityOfPage, itemListElement and friends
        for value in node.values():
            find_recipe_nodes(value, results)

    return results


def parse_servings(value: object) -> int | None:
    """Accept ``6``, ``"6"``, ``"Serves 6"`` or ``["6", "6 servings"]``."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        servings = int(value)
        return servings if servings > 0 else None
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if match is None:
            return None
        servings = int(match.group(1))
        return servings if servings > 0 else None
    if isinstance(value, list):
        for entry in value:
            servings = parse_servings(entry)
            if servings is not None:
                return servings
    return None


def _first_present(node: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = node.get(key)
        if value is not None:
            return value
    return None


def _recipe_title(node: dict[str, Any]) -> str | None:
    for key in _TITLE_KEYS:
        value = node.get(key)
        if isinstance(value, str):
            title = strip_tags(value)
            if title:
                return title
    return None


def _ingredient_lines(raw: object) -> list[str]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []

    # every string entry counts, even a blank one; objects only when they carry text
    lines: list[str] = []
    for item in raw:
        if isinstance(item, str):
            lines.append(strip_tags(item))
        elif isinstance(item, dict):
            text = item.get("text") if isinstance(item.get("text"), str) else item.get("name")
            line = strip_tags(text) if isinstance(text, str) else ""
            if line:
                lines.append(line)
    return lines


def _is_json_ld_script(tag: Tag) -> bool:
    declared = tag.get("type") or ""
    if isinstance(declared, list):
        declared = " ".join(declared)
    return declared.split(";", 1)[0].strip().lower() == JSON_LD_TYPE


def candidate_from_node(node: dict[str, Any]) -> ExtractionCandidate:
    return ExtractionCandidate(
        title=_recipe_title(node),
        servings=parse_servings(_first_present(node, _SERVINGS_KEYS)),
        ingredient_lines=_ingredient_lines(_first_present(node, _INGREDIENT_KEYS)),
    )


class StructuredDataExtractor:
    """Read title, servings and ingredient lines from embedded JSON-LD."""

    name = "structured-data"

    def recipe_nodes(self, page: ParsedPage) -> list[dict[str, Any]]:
        nodes: list[dict[str, Any]] = []
        for script in page.soup.find_all("script"):
            if not _is_json_ld_script(script):
                continue
            parsed = parse_json_ld(script.string or script.get_text())
            if parsed is None:
                continue
            find_recipe_nodes(parsed, nodes)
        return nodes

    def extract(self, page: ParsedPage) -> ExtractionCandidate:
        nodes = self.recipe_nodes(page)
        if not nodes:
            return ExtractionCandidate()
        if len(nodes) > 1:
            logger.debug("Found %d recipe nodes on %s; using the first", len(nodes), page.source_url)

        candidate = candidate_from_node(nodes[0])
        if candidate.is_empty:
            logger.debug("Recipe node on %s has no ingredient field", page.source_url)
        return candidate
