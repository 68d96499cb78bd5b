"""Site-tuned extraction rules used when generic strategies find nothing."""

from .allrecipes import AllRecipesRule
from .base import DomainRule, HostnameRule
from .delish import DelishRule
from .joshuaweissman import JoshuaWeissmanRule
from .registry import DomainRuleRegistry
from .simplyrecipes import SimplyRecipesRule


def build_default_rules() -> DomainRuleRegistry:
    """Return the registry of every built-in site rule."""
    return DomainRuleRegistry(
        [
            AllRecipesRule(),
            SimplyRecipesRule(),
            DelishRule(),
            JoshuaWeissmanRule(),
        ]
    )


__all__ = [
    "AllRecipesRule",
    "DelishRule",
    "DomainRule",
    "DomainRuleRegistry",
    "HostnameRule",
    "JoshuaWeissmanRule",
    "SimplyRecipesRule",
    "build_default_rules",
]
