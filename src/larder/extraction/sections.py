"""Heading-anchored ingredient extraction for pages without usable JSON-LD."""

from __future__ import annotations

import logging
from typing import Iterable

from bs4 import Tag

from larder.extraction.models import ExtractionCandidate
from larder.extraction.page import HEADING_TAGS, ParsedPage, is_heading, node_text

logger = logging.getLogger(__name__)

INGREDIENT_MARKER = "ingredient"
STOP_MARKERS = ("direction", "instruction", "method", "step")
LIST_CONTAINER_TAGS = ("ul", "ol")


def mentions_ingredients(text: str) -> bool:
    return INGREDIENT_MARKER in text.lower()


def is_stop_heading(text: str) -> bool:
    """True for headings that open the directions part of a recipe."""

    lowered = text.lower()
    return any(marker in lowered for marker in STOP_MARKERS)


def is_noise_line(line: str) -> bool:
    """Nutrition blurbs and notes that pages render as list items."""

    lowered = line.lower()
    if "nutrition information" in lowered:
        return True
    if lowered.startswith(("per serving", "note:")):
        return True
    if "calories" in lowered:
        return True
    return "fat" in lowered and "protein" in lowered


def filter_noise_lines(lines: Iterable[str]) -> list[str]:
    return [line for line in lines if not is_noise_line(line)]


def list_item_texts(nodes: Iterable[Tag]) -> list[str]:
    """Text of each outermost ``<li>``; items nested in a collected item stay part of it."""

    texts: list[str] = []
    collected: set[int] = set()
    for node in nodes:
        if node.name != "li":
            continue
        collected.add(id(node))
        if any(id(parent) in collected for parent in node.find_parents("li")):
            continue
        text = node_text(node)
        if text:
            texts.append(text)
    return texts


def _subtree_end(elements: list[Tag], index: int) -> int:
    """Position just past the element at ``index`` and all of its descendants."""

    return index + 1 + len(elements[index].find_all(True))


class SectionExtractor:
    """Harvest list items between the last "ingredients" heading and the next directions heading.

    Pages often repeat an "Ingredients" label in a table of contents before the
    real section, so the last matching heading wins.
    """

    name = "ingredients-section"

    def section_bounds(self, page: ParsedPage) -> tuple[int, int] | None:
        elements = page.elements

        start = -1
        for index, element in enumerate(elements):
            if element.name in HEADING_TAGS and mentions_ingredients(node_text(element)):
                start = _subtree_end(elements, index)
        if start == -1:
            return None

        stop = len(elements)
        for index in range(start, len(elements)):
            element = elements[index]
            if element.name in HEADING_TAGS and is_stop_heading(node_text(element)):
                stop = index
                break
        return start, stop

    def extract(self, page: ParsedPage) -> ExtractionCandidate:
        bounds = self.section_bounds(page)
        if bounds is None:
            return ExtractionCandidate()

        start, stop = bounds
        lines = filter_noise_lines(list_item_texts(page.elements[start:stop]))
        logger.debug("Ingredients section on %s yielded %d lines", page.source_url, len(lines))
        return ExtractionCandidate(ingredient_lines=lines)


class ListAfterHeadingExtractor:
    """Last-resort pass: the first list following each heading that mentions ingredients."""

    name = "list-after-heading"

    def extract(self, page: ParsedPage) -> ExtractionCandidate:
        lines: list[str] = []
        for heading in page.headings:
            if not mentions_ingredients(node_text(heading)):
                continue
            container = heading.find_next_sibling(list(LIST_CONTAINER_TAGS))
            if container is None:
                continue
            lines.extend(list_item_texts(container.find_all("li")))
        return ExtractionCandidate(ingredient_lines=lines)


def walk_section_siblings(heading: Tag) -> list[str]:
    """List items inside the siblings that follow ``heading`` up to a directions heading."""

    lines: list[str] = []
    for sibling in heading.find_next_siblings(True):
        if is_heading(sibling) and is_stop_heading(node_text(sibling)):
            break
        lines.extend(list_item_texts(sibling.find_all("li")))
    return lines
