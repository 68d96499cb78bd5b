"""Shared contract for generic (site-independent) extraction strategies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from larder.extraction.models import ExtractionCandidate
from larder.extraction.page import ParsedPage


@runtime_checkable
class ExtractionStrategy(Protocol):
    """Protocol that every generic strategy in the fallback chain implements."""

    name: str

    def extract(self, page: ParsedPage) -> ExtractionCandidate:
        """Return a candidate; an empty ingredient list means "try the next strategy"."""
