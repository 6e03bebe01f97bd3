"""
Base Brand Price Policy
Abstract base class that all brand price policies must inherit from
"""

from abc import ABC, abstractmethod
from typing import List

from src.scrapers.prices.result import PriceResult


class PriceNotFoundError(Exception):
    """Raised inside a policy when no price scenario matches the page."""


class BrandPolicy(ABC):
    """
    Abstract base class for brand price policies.

    A policy is stateless: one instance is built per brand and reused for
    every product page of that brand.
    """

    @property
    @abstractmethod
    def brand_name(self) -> str:
        """
        Brand name as stored in the brands table.

        Examples: 'Trendyol', 'Züber', 'uniq2go'
        """
        pass

    @property
    def url_patterns(self) -> List[str]:
        """
        Domains identifying this brand's product pages.
        Used as a fallback when a product URL carries an unknown brand name.
        """
        return []

    @abstractmethod
    def extract_prices(self, document) -> PriceResult:
        """
        Derive prices from a loaded product page.

        Args:
            document: PageDocument for the rendered product page

        Returns:
            PriceResult with at least original_price set

        Raises:
            PriceNotFoundError: If no price scenario matches
        """
        pass

    def extract(self, document) -> PriceResult:
        """
        Run extract_prices and turn a no-match into an error result.

        Args:
            document: PageDocument for the rendered product page

        Returns:
            PriceResult, never raising for a page without prices
        """
        try:
            return self.extract_prices(document)
        except PriceNotFoundError as e:
            return PriceResult.failure(str(e))

    def matches_url(self, url: str) -> bool:
        url_lower = url.lower()
        return any(pattern in url_lower for pattern in self.url_patterns)

    def matches_name(self, name: str) -> bool:
        return name.strip().casefold() == self.brand_name.strip().casefold()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.brand_name!r})"
