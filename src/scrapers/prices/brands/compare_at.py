"""
Compare-At Policy
Shopify-style <compare-at-price> / <sale-price> elements
"""

from src.scrapers.prices.base import BrandPolicy, PriceNotFoundError
from src.scrapers.prices.parser import try_selectors
from src.scrapers.prices.result import PriceResult


class CompareAtPolicy(BrandPolicy):
    """
    Two scenarios:
    1. With discount: compare-at-price (₺316) above sale-price (₺221)
    2. Without discount: sale-price alone is the regular price
    """

    COMPARE_AT_PRICE = 'compare-at-price'
    SALE_PRICE = 'sale-price'

    def __init__(self, brand_name: str, label: str = None):
        self._brand_name = brand_name
        self.label = label or brand_name

    @property
    def brand_name(self) -> str:
        return self._brand_name

    def extract_prices(self, document) -> PriceResult:
        compare_at_price = try_selectors(document, self.COMPARE_AT_PRICE)
        sale_price = try_selectors(document, self.SALE_PRICE)

        if not sale_price:
            raise PriceNotFoundError(f"No price found on {self.label} page")

        # A compare-at equal to or below the sale price is not a discount
        if compare_at_price and compare_at_price > sale_price:
            return PriceResult(original_price=compare_at_price, discount_price=sale_price)

        return PriceResult(original_price=sale_price)
