"""
Price Batch Runner
Renders every active product URL, extracts prices and records them in Supabase
"""

import asyncio
import time
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from playwright.async_api import async_playwright
from playwright_stealth import Stealth

from src.database.price_history import (
    create_scrape_job,
    fetch_active_product_urls,
    fetch_brand_rows,
    finish_scrape_job,
    get_supabase_client,
    save_price_data,
)
from src.scrapers.prices.browser import fetch_page_html
from src.scrapers.prices.config import RunnerConfig
from src.scrapers.prices.orchestrator import PriceExtractionOrchestrator
from src.scrapers.prices.registry import BrandNotConfiguredError, build_registry
from src.scrapers.prices.result import PriceResult
from src.scrapers.prices.selectors import load_selector_table, merge_brand_rows

FetchHtml = Callable[[object, str], Awaitable[str]]


class PriceBatchRunner:
    """
    Scrapes product URLs in bounded batches.

    Features:
    - At most config.concurrency pages rendered at the same time
    - Pause of config.batch_delay seconds between batches
    - Database writes serialized, one result at a time
    - A brand without configuration is reported once and its remaining
      URLs are skipped without being fetched, unless their domain matches
      a custom policy
    - An unexpected error in one URL is counted as an error for that URL only
    """

    def __init__(self, orchestrator: PriceExtractionOrchestrator, config: RunnerConfig,
                 supabase=None, fetch_html: Optional[FetchHtml] = None):
        """
        Args:
            orchestrator: Price extraction orchestrator
            config: Runner settings
            supabase: Supabase client; required unless config.dry_run
            fetch_html: async (browser, url) -> html; defaults to Playwright rendering
        """
        if supabase is None and not config.dry_run:
            raise ValueError("A Supabase client is required unless running with dry_run")

        self.orchestrator = orchestrator
        self.config = config
        self.supabase = supabase
        self._fetch_html = fetch_html or self._render_with_playwright
        self._semaphore = asyncio.Semaphore(config.concurrency)
        self._write_lock = asyncio.Lock()
        # casefolded brand name -> name as first seen
        self._unconfigured_brands: Dict[str, str] = {}

    async def _render_with_playwright(self, browser, url: str) -> str:
        return await fetch_page_html(
            browser, url,
            timeout=self.config.nav_timeout_ms,
            settle_ms=self.config.settle_ms,
        )

    def _chunks(self, items: List[Dict]) -> List[List[Dict]]:
        size = self.config.concurrency
        return [items[i:i + size] for i in range(0, len(items), size)]

    async def scrape_product_url(self, browser, product_url: Dict) -> Optional[PriceResult]:
        """
        Fetch, extract and persist one product URL.

        Returns:
            PriceResult, or None if the row has no brand and was skipped
        """
        brand = product_url.get('brands') or {}
        brand_name = brand.get('name')
        url = product_url.get('url', '')

        if not brand_name:
            print(f"⚠️  No brand found for product URL {product_url.get('id')}")
            return None

        brand_key = brand_name.strip().casefold()
        if brand_key in self._unconfigured_brands and not self.orchestrator.registry.get_by_url(url):
            result = PriceResult.failure(str(BrandNotConfiguredError(brand_name)))
            await self._persist(product_url, result)
            return result

        # A brand unknown by name can still resolve through its URL domain
        try:
            self.orchestrator.resolve_policy(brand_name, url)
        except BrandNotConfiguredError as e:
            if brand_key not in self._unconfigured_brands:
                print(f"❌ {e}")
                self._unconfigured_brands[brand_key] = brand_name
            result = PriceResult.failure(str(e))
            await self._persist(product_url, result)
            return result

        async with self._semaphore:
            start = time.perf_counter()
            print(f"\n🔍 Scraping: {url}")
            print(f"  ├─ Brand: {brand_name}")
            try:
                html = await self._fetch_html(browser, url)
                result = self.orchestrator.extract_html(brand_name, html, url)
            except Exception as e:
                result = PriceResult.failure(str(e) or type(e).__name__)

            elapsed_ms = (time.perf_counter() - start) * 1000
            if result.success:
                print(
                    f"  └─ ✅ Original: {result.original_price} | Discount: {result.discount_price} "
                    f"| Member: {result.member_price} ({elapsed_ms:.0f}ms)"
                )
            else:
                print(f"  └─ ❌ Error: {result.error} ({elapsed_ms:.0f}ms)")

        await self._persist(product_url, result)
        return result

    async def _persist(self, product_url: Dict, result: PriceResult) -> None:
        if self.config.dry_run:
            return
        async with self._write_lock:
            save_price_data(self.supabase, product_url, result)

    async def run(self, browser, product_urls: List[Dict]) -> Dict:
        """
        Scrape all product URLs in batches.

        Args:
            browser: Playwright browser (passed through to fetch_html)
            product_urls: product_urls rows with nested 'brands'

        Returns:
            Dict with total, scraped_count, error_count and per-URL results
        """
        scraped_count = 0
        error_count = 0
        results: List[Tuple[Dict, Optional[PriceResult]]] = []

        batches = self._chunks(product_urls)
        for index, batch in enumerate(batches):
            batch_results = await asyncio.gather(
                *(self.scrape_product_url(browser, product_url) for product_url in batch),
                return_exceptions=True
            )

            for product_url, result in zip(batch, batch_results):
                if isinstance(result, BaseException):
                    print(f"❌ Unexpected error for product URL {product_url.get('id')}: {result!r}")
                    result = PriceResult.failure(str(result) or type(result).__name__)
                results.append((product_url, result))
                if result is not None and result.success:
                    scraped_count += 1
                else:
                    error_count += 1

            if index < len(batches) - 1 and self.config.batch_delay > 0:
                await asyncio.sleep(self.config.batch_delay)

        return {
            'total': len(product_urls),
            'scraped_count': scraped_count,
            'error_count': error_count,
            'unconfigured_brands': sorted(self._unconfigured_brands.values()),
            'results': results,
        }


def build_orchestrator(config: RunnerConfig, supabase=None) -> PriceExtractionOrchestrator:
    """
    Build the orchestrator once for the whole run.

    Selectors stored on brand rows override the JSON selector table.
    """
    selector_table = load_selector_table(config.selectors_file)
    if supabase is not None:
        try:
            selector_table = merge_brand_rows(selector_table, fetch_brand_rows(supabase))
        except Exception as e:
            print(f"⚠️  Could not load brand selectors from database: {e}")
    return PriceExtractionOrchestrator(build_registry(selector_table))


async def run_price_scrape(config: RunnerConfig) -> Dict:
    """
    Full scraping job: load URLs, open a scrape job, scrape, close the job.

    Args:
        config: Runner settings

    Returns:
        Stats dict from PriceBatchRunner.run (empty run when no URLs are active)
    """
    print("🚀 Starting price scraper...")
    print(f"📅 Time: {time.strftime('%Y-%m-%d %H:%M:%S')}")

    supabase = get_supabase_client()
    product_urls = fetch_active_product_urls(supabase, config.product_id)

    if config.brand:
        wanted = config.brand.strip().casefold()
        product_urls = [
            row for row in product_urls
            if ((row.get('brands') or {}).get('name') or '').strip().casefold() == wanted
        ]

    if not product_urls:
        print("ℹ️  No active product URLs to scrape")
        return {'total': 0, 'scraped_count': 0, 'error_count': 0, 'unconfigured_brands': [], 'results': []}

    print(f"📦 Found {len(product_urls)} URLs to scrape")

    orchestrator = build_orchestrator(config, supabase)
    print(f"📋 {orchestrator.registry}")

    job_id = None
    if not config.dry_run:
        job_id = create_scrape_job(supabase, len(product_urls), config.triggered_by)
        print(f"📋 Scrape job ID: {job_id}")

    runner = PriceBatchRunner(orchestrator, config, supabase=supabase)

    try:
        async with Stealth().use_async(async_playwright()) as p:
            browser = await p.chromium.launch(
                headless=config.headless,
                args=[
                    '--no-sandbox',
                    '--disable-setuid-sandbox',
                    '--disable-dev-shm-usage',
                    '--disable-gpu',
                    '--disable-blink-features=AutomationControlled',
                ]
            )
            try:
                stats = await runner.run(browser, product_urls)
            finally:
                await browser.close()
    except Exception as e:
        if not config.dry_run:
            finish_scrape_job(supabase, job_id, len(product_urls), 0, len(product_urls), error_message=str(e))
        raise

    if not config.dry_run:
        finish_scrape_job(supabase, job_id, stats['total'], stats['scraped_count'], stats['error_count'])

    print("\n📊 Summary:")
    print(f"   Total URLs: {stats['total']}")
    print(f"   Successfully scraped: {stats['scraped_count']}")
    print(f"   Errors: {stats['error_count']}")
    if stats['unconfigured_brands']:
        print(f"   Unconfigured brands: {', '.join(stats['unconfigured_brands'])}")
    print("✅ Scraping complete!")

    return stats
