"""Immutable hostname-keyed lookup over the registered site rules."""

from __future__ import annotations

from typing import Iterable, Iterator

from larder.extraction.page import normalize_hostname
from larder.extraction.sites.base import DomainRule


class DomainRuleRegistry:
    """Ordered, read-only collection of site rules; the first match wins."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[DomainRule] = ()) -> None:
        collected = tuple(rules)
        names = [rule.name for rule in collected]
        if any(not name for name in names):
            raise ValueError("Domain rule name cannot be empty")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate domain rule names: {names}")
        self._rules: tuple[DomainRule, ...] = collected

    def __iter__(self) -> Iterator[DomainRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self._rules)

    def find(self, hostname: str) -> DomainRule | None:
        """Return the first rule matching a hostname (``www.`` and case are ignored)."""

        normalized = hostname.lower()
        if normalized.startswith("www."):
            normalized = normalized[4:]
        if not normalized:
            return None
        for rule in self._rules:
            if rule.matches(normalized):
                return rule
        return None

    def find_for_url(self, url: str) -> DomainRule | None:
        return self.find(normalize_hostname(url))
