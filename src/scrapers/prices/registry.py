"""
Brand Policy Registry
Immutable lookup of brand name -> price policy, built once at startup
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from src.scrapers.prices.base import BrandPolicy
from src.scrapers.prices.brands import (
    CompareAtPolicy,
    FellasPolicy,
    MarketplaceTierPolicy,
    ServetPolicy,
    TwoSpanDiscountPolicy,
    WefoodPolicy,
    ZuberPolicy,
)
from src.scrapers.prices.selectors import BrandSelectors, load_selector_table


class BrandNotConfiguredError(ValueError):
    """No custom policy and no selector table entry exist for a brand."""

    def __init__(self, brand_name: str):
        self.brand_name = brand_name
        super().__init__(f"No scraper or selectors configured for brand: {brand_name}")


def _key(name: str) -> str:
    return (name or '').strip().casefold()


class BrandPolicyRegistry:
    """
    Maps brand names (case-insensitive) to custom policies and selector tables.

    Both tables are frozen at construction time.
    """

    def __init__(self, policies: Iterable[BrandPolicy] = (),
                 selector_table: Optional[Mapping[str, BrandSelectors]] = None):
        """
        Args:
            policies: Custom policies, one per brand

            selector_table: Brand name -> BrandSelectors for default-policy brands

        Raises:
            ValueError: If two policies are registered for the same brand
        """
        custom: Dict[str, BrandPolicy] = {}
        for policy in policies:
            key = _key(policy.brand_name)
            if key in custom:
                raise ValueError(f"Policy for '{policy.brand_name}' is already registered")
            custom[key] = policy

        selectors: Dict[str, BrandSelectors] = {}
        names: Dict[str, str] = {}
        for name, entry in (selector_table or {}).items():
            selectors[_key(name)] = entry
            names[_key(name)] = name

        self._policies = MappingProxyType(custom)
        self._selectors = MappingProxyType(selectors)
        self._selector_names = MappingProxyType(names)

    def get_policy(self, name: str) -> Optional[BrandPolicy]:
        """Custom policy for a brand, or None."""
        return self._policies.get(_key(name))

    def get_selectors(self, name: str) -> Optional[BrandSelectors]:
        """Selector table entry for a brand, or None."""
        return self._selectors.get(_key(name))

    def get_by_url(self, url: str) -> Optional[BrandPolicy]:
        """Custom policy whose url_patterns match a product URL, or None."""
        if not url:
            return None
        for policy in self._policies.values():
            if policy.matches_url(url):
                return policy
        return None

    def is_registered(self, name: str) -> bool:
        key = _key(name)
        return key in self._policies or key in self._selectors

    def custom_brand_names(self) -> List[str]:
        return [policy.brand_name for policy in self._policies.values()]

    def selector_brand_names(self) -> List[str]:
        return list(self._selector_names.values())

    def brand_names(self) -> List[str]:
        names = self.custom_brand_names()
        names.extend(name for key, name in self._selector_names.items() if key not in self._policies)
        return names

    def __len__(self) -> int:
        return len(self.brand_names())

    def __repr__(self) -> str:
        return (
            f"BrandPolicyRegistry({len(self._policies)} custom policies, "
            f"{len(self._selectors)} selector brands)"
        )


def default_policies() -> List[BrandPolicy]:
    """
    All brands with custom price logic.

    Add new policies here as they are implemented.
    """
    return [
        MarketplaceTierPolicy(),
        ZuberPolicy(),
        ServetPolicy(),
        FellasPolicy(),
        WefoodPolicy(),
        CompareAtPolicy('Saf', label='SAF'),
        TwoSpanDiscountPolicy('Fropie'),
        TwoSpanDiscountPolicy('uniq2go'),
    ]


def build_registry(selector_table: Optional[Mapping[str, BrandSelectors]] = None,
                   selectors_file: Optional[str] = None) -> BrandPolicyRegistry:
    """
    Build the registry used by the orchestrator.

    Args:
        selector_table: Ready selector table; loaded from selectors_file when omitted
        selectors_file: JSON selector config path (default: config/brand_selectors.json)

    Returns:
        BrandPolicyRegistry with every custom policy and the selector table
    """
    if selector_table is None:
        selector_table = load_selector_table(selectors_file)
    return BrandPolicyRegistry(default_policies(), selector_table)
