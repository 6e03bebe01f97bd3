"""
Selector Table Policy
Default price policy driven entirely by configured selectors
"""

from src.scrapers.prices.base import BrandPolicy, PriceNotFoundError
from src.scrapers.prices.parser import try_selectors
from src.scrapers.prices.result import PriceResult
from src.scrapers.prices.selectors import BrandSelectors


class SelectorTablePolicy(BrandPolicy):
    """
    Reads original/discount/member prices from a BrandSelectors record.

    When the original selector finds nothing but the discount selector does,
    the page has no crossed-out price and the "discount" element is really
    the regular price, so it is promoted to original.
    """

    def __init__(self, brand_name: str, selectors: BrandSelectors, promote_discount: bool = True,
                 error_message: str = None):
        self._brand_name = brand_name
        self.selectors = selectors
        self.promote_discount = promote_discount
        self._error_message = error_message

    @property
    def brand_name(self) -> str:
        return self._brand_name

    def extract_prices(self, document) -> PriceResult:
        original_price = try_selectors(document, self.selectors.original)
        discount_price = try_selectors(document, self.selectors.discount)
        member_price = try_selectors(document, self.selectors.member)

        if original_price is None and discount_price is not None and self.promote_discount:
            return PriceResult(
                original_price=discount_price,
                discount_price=None,
                member_price=member_price,
            )

        if original_price is None:
            raise PriceNotFoundError(
                self._error_message
                or f"No price found for {self.brand_name} with selectors: {self.selectors.original}"
            )

        return PriceResult(
            original_price=original_price,
            discount_price=discount_price,
            member_price=member_price,
        )


class FellasPolicy(SelectorTablePolicy):
    """Fellas: plain ID-based selectors, discount promoted when no list price."""

    SELECTORS = BrandSelectors(
        original='#fiyat .spanFiyat',
        discount='#indirimliFiyat .spanFiyat',
    )

    def __init__(self):
        super().__init__('Fellas', self.SELECTORS, error_message='No price found on Fellas page')


class WefoodPolicy(SelectorTablePolicy):
    """
    Wefood: the regular price is always rendered; a "Sepette %40 İndirimli"
    campaign price appears next to it only during campaigns.
    """

    SELECTORS = BrandSelectors(
        original='.price__regular .price-item--regular',
        discount='.price-item-discount',
    )

    def __init__(self):
        super().__init__('Wefood', self.SELECTORS, promote_discount=False,
                         error_message='No price found on Wefood page')
