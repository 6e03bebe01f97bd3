"""
Brand Price Policies
One policy kind per page layout; brands are instances of these kinds
"""

from src.scrapers.prices.brands.compare_at import CompareAtPolicy
from src.scrapers.prices.brands.inverted_naming import InvertedNamingPolicy, ServetPolicy, ZuberPolicy
from src.scrapers.prices.brands.marketplace import MarketplaceTierPolicy
from src.scrapers.prices.brands.selector_table import FellasPolicy, SelectorTablePolicy, WefoodPolicy
from src.scrapers.prices.brands.two_span import TwoSpanDiscountPolicy

__all__ = [
    'CompareAtPolicy',
    'FellasPolicy',
    'InvertedNamingPolicy',
    'MarketplaceTierPolicy',
    'SelectorTablePolicy',
    'ServetPolicy',
    'TwoSpanDiscountPolicy',
    'WefoodPolicy',
    'ZuberPolicy',
]
