"""Entry point owning the fallback order between extraction strategies."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Sequence
from urllib.parse import urlparse

from larder.extraction.base import ExtractionStrategy
from larder.extraction.ingredients import parse_ingredient_lines
from larder.extraction.models import ExtractionCandidate, RawDocument, RecipePreview
from larder.extraction.page import ParsedPage
from larder.extraction.sections import ListAfterHeadingExtractor, SectionExtractor
from larder.extraction.sites import DomainRule, DomainRuleRegistry, build_default_rules
from larder.extraction.structured_data import StructuredDataExtractor

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = {"http", "https"}
# dotted labels (IDN letters allowed) or a bare IPv6 literal
_HOSTNAME_RE = re.compile(r"^(?:[\w-]+(?:\.[\w-]+)*\.?|[0-9a-f:.]+)$", re.IGNORECASE)


@dataclass(slots=True)
class InvalidRecipeUrlError(ValueError):
    """Raised before any parsing when the source URL is not an absolute web address."""

    url: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid recipe url: {self.reason} (url={self.url!r})"


def validate_source_url(url: str) -> str:
    """Return the trimmed URL or raise :class:`InvalidRecipeUrlError`."""

    if not isinstance(url, str) or not url.strip():
        raise InvalidRecipeUrlError(str(url), "empty url")
    candidate = url.strip()
    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
        parsed.port  # raises ValueError for non-numeric or out-of-range ports
    except ValueError as exc:
        raise InvalidRecipeUrlError(candidate, f"unparseable url: {exc}") from exc

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidRecipeUrlError(candidate, "scheme must be http or https")
    if not hostname:
        raise InvalidRecipeUrlError(candidate, "missing host")
    if not _HOSTNAME_RE.match(hostname):
        raise InvalidRecipeUrlError(candidate, f"malformed host {hostname!r}")
    return candidate


class RecipeExtractor:
    """Run generic strategies, then a site rule, then a last-resort list scan.

    The chain short-circuits: the first step that yields at least one
    ingredient line decides the result and later steps never run.
    """

    def __init__(
        self,
        *,
        strategies: Sequence[ExtractionStrategy] | None = None,
        rules: DomainRuleRegistry | None = None,
        final_strategy: ExtractionStrategy | None = None,
    ) -> None:
        if strategies is None:
            strategies = (StructuredDataExtractor(), SectionExtractor())
        self._strategies: tuple[ExtractionStrategy, ...] = tuple(strategies)
        self._rules = rules if rules is not None else build_default_rules()
        self._final_strategy = final_strategy or ListAfterHeadingExtractor()

    @property
    def strategies(self) -> tuple[ExtractionStrategy, ...]:
        return self._strategies

    @property
    def rules(self) -> DomainRuleRegistry:
        return self._rules

    def extract(self, markup: str, source_url: str) -> RecipePreview:
        """Build a best-effort preview for ``markup`` fetched from ``source_url``."""

        url = validate_source_url(source_url)
        page = ParsedPage(markup or "", url)
        rule = self._rules.find(page.hostname)

        for strategy in self._strategies:
            candidate = self._run_strategy(strategy, page)
            if candidate.is_empty:
                continue
            logger.info(
                "Strategy %s found %d ingredient lines for %s",
                strategy.name,
                len(candidate.ingredient_lines),
                url,
            )
            return self._build_preview(page, candidate, rule)

        fallback_title = page.fallback_title()
        fallback_servings = page.body_servings

        if rule is not None:
            logger.info("Generic strategies found no ingredients for %s; using site rule %s", url, rule.name)
            preview = self._run_rule(rule, page, fallback_title, fallback_servings)
            if preview is not None:
                return preview
            return RecipePreview(title=fallback_title, source_url=url, servings=fallback_servings)

        candidate = self._run_strategy(self._final_strategy, page)
        logger.info(
            "Final pass %s found %d ingredient lines for %s",
            self._final_strategy.name,
            len(candidate.ingredient_lines),
            url,
        )
        return RecipePreview(
            title=fallback_title,
            source_url=url,
            servings=fallback_servings,
            ingredients=parse_ingredient_lines(candidate.ingredient_lines),
        )

    def extract_document(self, document: RawDocument) -> RecipePreview:
        return self.extract(document.markup, document.source_url)

    def _build_preview(
        self,
        page: ParsedPage,
        candidate: ExtractionCandidate,
        rule: DomainRule | None,
    ) -> RecipePreview:
        title = candidate.title or page.fallback_title()
        if rule is not None:
            title = rule.refine_title(page, title)
        servings = candidate.servings if candidate.servings is not None else page.body_servings
        return RecipePreview(
            title=title,
            source_url=page.source_url,
            servings=servings,
            ingredients=parse_ingredient_lines(candidate.ingredient_lines),
        )

    def _run_strategy(self, strategy: ExtractionStrategy, page: ParsedPage) -> ExtractionCandidate:
        try:
            return strategy.extract(page)
        except Exception:
            logger.exception("Strategy %s failed on %s", strategy.name, page.source_url)
            return ExtractionCandidate()

    def _run_rule(
        self,
        rule: DomainRule,
        page: ParsedPage,
        fallback_title: str,
        fallback_servings: int | None,
    ) -> RecipePreview | None:
        try:
            return rule.extract(page.markup, page.source_url, fallback_title, fallback_servings)
        except Exception:
            logger.exception("Site rule %s failed on %s", rule.name, page.source_url)
            return None


_DEFAULT_EXTRACTOR = RecipeExtractor()


def extract_recipe(markup: str, source_url: str) -> RecipePreview:
    """Extract with the default strategies and built-in site rules."""

    return _DEFAULT_EXTRACTOR.extract(markup, source_url)
