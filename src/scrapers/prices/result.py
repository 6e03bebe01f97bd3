"""
Price Result
The single output type of every brand price policy
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class PriceResult:
    """
    Prices extracted from one product page.

    Either at least one price is set and error is None, or all prices are
    None and error describes why nothing was found.
    """

    original_price: Optional[float] = None
    discount_price: Optional[float] = None
    member_price: Optional[float] = None
    error: Optional[str] = None

    def __post_init__(self):
        has_price = any(
            value is not None
            for value in (self.original_price, self.discount_price, self.member_price)
        )
        if self.error is not None and has_price:
            raise ValueError("PriceResult cannot carry both prices and an error")
        if self.error is None and not has_price:
            raise ValueError("PriceResult without prices must carry an error")

    @classmethod
    def failure(cls, message: str) -> 'PriceResult':
        """Build an error result with all prices empty."""
        return cls(error=message or 'Unknown extraction error')

    @property
    def success(self) -> bool:
        return self.error is None

    def to_record(self) -> Dict:
        """
        Column mapping used for price_history rows.

        'price' is the legacy single-price column and mirrors original_price.
        """
        return {
            'original_price': self.original_price,
            'discount_price': self.discount_price,
            'member_price': self.member_price,
            'price': self.original_price,
            'error': self.error,
        }

    def to_dict(self) -> Dict:
        return {
            'originalPrice': self.original_price,
            'discountPrice': self.discount_price,
            'memberPrice': self.member_price,
            'error': self.error,
        }
