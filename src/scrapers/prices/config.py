"""
Configuration for the price scraping job.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Defaults
DEFAULT_CONCURRENCY = 10  # Pages scraped in parallel per batch
DEFAULT_BATCH_DELAY = 1.0  # Seconds between batches, to be nice to servers
DEFAULT_NAV_TIMEOUT_MS = 15000
DEFAULT_SETTLE_MS = 1000  # Wait after domcontentloaded for prices rendered by JS

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        print(f"⚠️  Invalid {name}={value!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        print(f"⚠️  Invalid {name}={value!r}, using {default}")
        return default


@dataclass
class RunnerConfig:
    """Settings for one batch scraping run."""

    concurrency: int = DEFAULT_CONCURRENCY
    batch_delay: float = DEFAULT_BATCH_DELAY
    nav_timeout_ms: int = DEFAULT_NAV_TIMEOUT_MS
    settle_ms: int = DEFAULT_SETTLE_MS
    headless: bool = True
    triggered_by: Optional[str] = None
    product_id: Optional[str] = None
    brand: Optional[str] = None
    selectors_file: Optional[str] = None
    dry_run: bool = False

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.batch_delay < 0:
            raise ValueError(f"batch_delay cannot be negative, got {self.batch_delay}")

    @classmethod
    def from_env(cls, **overrides) -> 'RunnerConfig':
        """
        Build config from environment variables.

        Keyword overrides that are not None win over the environment.
        """
        values = {
            'concurrency': _env_int('SCRAPE_CONCURRENCY', DEFAULT_CONCURRENCY),
            'batch_delay': _env_float('SCRAPE_BATCH_DELAY', DEFAULT_BATCH_DELAY),
            'nav_timeout_ms': _env_int('SCRAPE_NAV_TIMEOUT_MS', DEFAULT_NAV_TIMEOUT_MS),
            'triggered_by': os.getenv('TRIGGERED_BY') or None,
            'product_id': os.getenv('PRODUCT_ID') or None,
            'selectors_file': os.getenv('BRAND_SELECTORS_FILE') or None,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
