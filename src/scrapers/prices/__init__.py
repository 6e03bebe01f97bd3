"""
Price Extraction Module
Brand-aware price extraction from rendered product pages
"""

from src.scrapers.prices.base import BrandPolicy, PriceNotFoundError
from src.scrapers.prices.document import PageDocument
from src.scrapers.prices.orchestrator import PriceExtractionOrchestrator, extract
from src.scrapers.prices.parser import parse_price, try_selectors
from src.scrapers.prices.registry import BrandNotConfiguredError, BrandPolicyRegistry, build_registry
from src.scrapers.prices.result import PriceResult
from src.scrapers.prices.selectors import BrandSelectors, load_selector_table

__all__ = [
    'BrandNotConfiguredError',
    'BrandPolicy',
    'BrandPolicyRegistry',
    'BrandSelectors',
    'PageDocument',
    'PriceExtractionOrchestrator',
    'PriceNotFoundError',
    'PriceResult',
    'build_registry',
    'extract',
    'load_selector_table',
    'parse_price',
    'try_selectors',
]
