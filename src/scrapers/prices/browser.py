"""
Browser utilities for Playwright
"""

import time

from src.scrapers.prices.config import (
    DEFAULT_NAV_TIMEOUT_MS,
    DEFAULT_SETTLE_MS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    USER_AGENT,
)


async def create_page(browser):
    """Create a new page with common viewport and user agent settings"""
    page = await browser.new_page()
    await page.set_viewport_size({'width': SCREEN_WIDTH, 'height': SCREEN_HEIGHT})
    await page.set_extra_http_headers({'User-Agent': USER_AGENT})
    return page


async def navigate_to_url(page, url: str, timeout: int = DEFAULT_NAV_TIMEOUT_MS,
                          settle_ms: int = DEFAULT_SETTLE_MS) -> None:
    """
    Navigate to a product page.

    Uses 'domcontentloaded' rather than 'networkidle': analytics and tracking
    requests can keep the network busy for a long time, while prices render
    shortly after the DOM is ready.

    Raises:
        playwright TimeoutError / Error on navigation failure
    """
    start = time.perf_counter()
    try:
        await page.goto(url, wait_until='domcontentloaded', timeout=timeout)
        print(f"  ├─ ⏱️  Page loaded in {(time.perf_counter() - start) * 1000:.0f}ms")
        await page.wait_for_timeout(settle_ms)
    except Exception:
        print(f"  ├─ ⚠️  Navigation failed after {(time.perf_counter() - start) * 1000:.0f}ms")
        raise


async def fetch_page_html(browser, url: str, timeout: int = DEFAULT_NAV_TIMEOUT_MS,
                          settle_ms: int = DEFAULT_SETTLE_MS) -> str:
    """
    Render a product page and return its HTML.

    The page is always closed, also when navigation fails.
    """
    page = await create_page(browser)
    try:
        await navigate_to_url(page, url, timeout=timeout, settle_ms=settle_ms)
        return await page.content()
    finally:
        await page.close()
