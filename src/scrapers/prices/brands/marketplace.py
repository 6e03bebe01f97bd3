"""
Marketplace Tier Policy
Trendyol product pages with crossed-out, discount and Plus member pricing
"""

from typing import List

from src.scrapers.prices.base import BrandPolicy, PriceNotFoundError
from src.scrapers.prices.parser import try_selectors
from src.scrapers.prices.result import PriceResult

# Plus prices further than this from the regular discount price belong to another product card
PLUS_PRICE_TOLERANCE = 0.5


class MarketplaceTierPolicy(BrandPolicy):
    """
    Scenarios, checked in order:
    A. Crossed-out + Plus pricing (~~200~~ 134.42 TL + Plus 120.98 TL)
    B. Plus pricing only (219 TL + Plus 208.05 TL "Sepette")
    C. Crossed-out + regular discount (~~649~~ 520 TL)
    D. Single price (211 TL)
    E. Whatever crossed-out or Plus price is left
    """

    # Main product area only; recommendation carousels reuse the same price classes
    PRODUCT_SCOPE = '.productDetailWrapper, #product-detail-app, .pr-in-w'

    CROSSED_OUT_PRICE = (
        'span.prc-org, .original-price, .price-old, .old-price, .original, '
        'span.original, .price-view .original'
    )
    PLUS_ORIGINAL_PRICE = '.ty-plus-price-original-price'
    PLUS_MEMBER_PRICE = '.ty-plus-price-discounted-price'
    REGULAR_DISCOUNT_PRICE = (
        'span.discounted, .discounted, .price-view .discounted, .prc-dsc, '
        '.price-current-price, .new-price'
    )

    @property
    def brand_name(self) -> str:
        return 'Trendyol'

    @property
    def url_patterns(self) -> List[str]:
        return ['trendyol.com']

    @staticmethod
    def is_plus_valid(plus_original, plus_member, regular_discount) -> bool:
        """
        Trust a Plus price pair only when there is no competing regular price,
        or when it is within PLUS_PRICE_TOLERANCE of that regular price.
        """
        if not (plus_original and plus_member):
            return False
        if not regular_discount:
            return True
        return abs(plus_original - regular_discount) / regular_discount < PLUS_PRICE_TOLERANCE

    def extract_prices(self, document) -> PriceResult:
        scope = document.scope(self.PRODUCT_SCOPE)

        crossed_out = try_selectors(scope, self.CROSSED_OUT_PRICE)
        plus_original = try_selectors(scope, self.PLUS_ORIGINAL_PRICE)
        plus_member = try_selectors(scope, self.PLUS_MEMBER_PRICE)
        regular_discount = try_selectors(scope, self.REGULAR_DISCOUNT_PRICE)

        plus_valid = self.is_plus_valid(plus_original, plus_member, regular_discount)

        if crossed_out and plus_valid:
            return PriceResult(
                original_price=crossed_out,
                discount_price=plus_original,
                member_price=plus_member,
            )

        if plus_valid:
            return PriceResult(original_price=plus_original, member_price=plus_member)

        if crossed_out and regular_discount:
            return PriceResult(original_price=crossed_out, discount_price=regular_discount)

        if regular_discount:
            return PriceResult(original_price=regular_discount)

        fallback = crossed_out or plus_original or regular_discount
        if not fallback:
            raise PriceNotFoundError('No price found on Trendyol page')

        return PriceResult(original_price=fallback)
