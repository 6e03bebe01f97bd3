"""
Price Extraction Orchestrator
Selects the right brand policy and runs it against a loaded product page
"""

import time
from functools import lru_cache
from typing import Optional

from src.scrapers.prices.base import BrandPolicy
from src.scrapers.prices.brands import SelectorTablePolicy
from src.scrapers.prices.document import PageDocument
from src.scrapers.prices.registry import BrandNotConfiguredError, BrandPolicyRegistry, build_registry
from src.scrapers.prices.result import PriceResult


class PriceExtractionOrchestrator:
    """
    Single entry point of the price engine.

    Resolution order for a brand:
    1. Custom policy registered under the brand name
    2. Selector table entry, wrapped in a SelectorTablePolicy
    3. BrandNotConfiguredError (missing onboarding, not a bad page)

    Never retries; retrying a page is the batch runner's job.
    """

    def __init__(self, registry: BrandPolicyRegistry):
        self.registry = registry

    def resolve_policy(self, brand_name: str, url: Optional[str] = None) -> BrandPolicy:
        """
        Find the policy for a brand.

        Args:
            brand_name: Brand name as stored in the brands table
            url: Product URL, used to match custom policies by domain as a last resort

        Raises:
            BrandNotConfiguredError: If nothing is configured for the brand
        """
        policy = self.registry.get_policy(brand_name)
        if policy:
            return policy

        selectors = self.registry.get_selectors(brand_name)
        if selectors:
            return SelectorTablePolicy(brand_name, selectors)

        if url:
            policy = self.registry.get_by_url(url)
            if policy:
                return policy

        raise BrandNotConfiguredError(brand_name)

    def extract(self, brand_name: str, document: PageDocument, url: Optional[str] = None) -> PriceResult:
        """
        Extract prices for one product page.

        Args:
            brand_name: Brand name as stored in the brands table
            document: PageDocument of the rendered page
            url: Optional product URL (domain fallback for policy lookup)

        Returns:
            PriceResult; a page without prices yields an error result

        Raises:
            BrandNotConfiguredError: If the brand has no policy or selectors
        """
        policy = self.resolve_policy(brand_name, url)

        start = time.perf_counter()
        try:
            result = policy.extract(document)
        except Exception as e:
            result = PriceResult.failure(f"{type(e).__name__} in {policy.brand_name} policy: {e}")
        elapsed_ms = (time.perf_counter() - start) * 1000

        print(f"  ├─ ⏱️  Price extraction ({policy.brand_name}): {elapsed_ms:.0f}ms")
        return result

    def extract_html(self, brand_name: str, html: str, url: Optional[str] = None) -> PriceResult:
        """Parse raw page HTML and extract prices from it."""
        start = time.perf_counter()
        document = PageDocument.from_html(html)
        print(f"  ├─ ⏱️  HTML parsing: {(time.perf_counter() - start) * 1000:.0f}ms")
        return self.extract(brand_name, document, url)

    def __repr__(self) -> str:
        return f"PriceExtractionOrchestrator({self.registry!r})"


@lru_cache(maxsize=None)
def default_orchestrator() -> PriceExtractionOrchestrator:
    """Orchestrator over the default registry, built on first use and reused afterwards."""
    return PriceExtractionOrchestrator(build_registry())


def extract(brand_name: str, document: PageDocument,
            registry: Optional[BrandPolicyRegistry] = None) -> PriceResult:
    """
    Functional shortcut around PriceExtractionOrchestrator.

    Without a registry the cached default orchestrator is used, so the
    selector table is read once per process.
    """
    if registry is None:
        return default_orchestrator().extract(brand_name, document)
    return PriceExtractionOrchestrator(registry).extract(brand_name, document)
