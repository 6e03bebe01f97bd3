"""
Inverted Naming Policy
For themes whose price class names are backwards
"""

from src.scrapers.prices.base import BrandPolicy, PriceNotFoundError
from src.scrapers.prices.parser import try_selectors
from src.scrapers.prices.result import PriceResult


class InvertedNamingPolicy(BrandPolicy):
    """
    Backwards naming convention:
    - .product-price--original holds the SALE price (when discounted)
    - .product-price--compare holds the ORIGINAL price

    Two scenarios:
    1. With discount: both selectors have values
    2. No discount: compare is empty, the "original" class has the regular price
    """

    SALE_PRICE = '.product-price--original'

    def __init__(self, brand_name: str, compare_selector: str, sale_selector: str = SALE_PRICE):
        self._brand_name = brand_name
        self.compare_selector = compare_selector
        self.sale_selector = sale_selector

    @property
    def brand_name(self) -> str:
        return self._brand_name

    def extract_prices(self, document) -> PriceResult:
        compare_price = try_selectors(document, self.compare_selector)
        sale_price = try_selectors(document, self.sale_selector)

        if compare_price is not None and sale_price is not None:
            return PriceResult(original_price=compare_price, discount_price=sale_price)

        if compare_price is None and sale_price is not None:
            return PriceResult(original_price=sale_price)

        raise PriceNotFoundError(f"No prices found on {self.brand_name} page")


class ZuberPolicy(InvertedNamingPolicy):

    def __init__(self):
        super().__init__('Züber', compare_selector='.product-price--compare span')


class ServetPolicy(InvertedNamingPolicy):

    def __init__(self):
        super().__init__('Servet', compare_selector='.product-price--compare span:first-child')
