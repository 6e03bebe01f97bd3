"""
Two-Span Discount Policy
For storefronts rendering a discount as two spans inside one price container
"""

from src.scrapers.prices.base import BrandPolicy, PriceNotFoundError
from src.scrapers.prices.parser import try_selectors
from src.scrapers.prices.result import PriceResult


class TwoSpanDiscountPolicy(BrandPolicy):
    """
    Two scenarios:
    1. With discount: .discount-price holds two spans, grayed-out original
       first and the discounted price last
    2. Without discount: a single price in .price-main or .discount-price
    """

    CONTAINER = '.discount-price'
    ORIGINAL_PRICE = '.discount-price span:first-child'
    DISCOUNT_PRICE = '.discount-price span:last-child'
    SINGLE_PRICE = '.price-main, .discount-price'

    def __init__(self, brand_name: str):
        self._brand_name = brand_name

    @property
    def brand_name(self) -> str:
        return self._brand_name

    def extract_prices(self, document) -> PriceResult:
        spans = document.select_all(f"{self.CONTAINER} span")

        if len(spans) >= 2:
            original_price = try_selectors(document, self.ORIGINAL_PRICE)
            discount_price = try_selectors(document, self.DISCOUNT_PRICE)

            # Same value in both spans (or reversed) means no real discount
            if original_price and discount_price and original_price > discount_price:
                return PriceResult(original_price=original_price, discount_price=discount_price)

        single_price = try_selectors(document, self.SINGLE_PRICE)

        if not single_price:
            raise PriceNotFoundError(f"No price found on {self.brand_name} page")

        return PriceResult(original_price=single_price)
