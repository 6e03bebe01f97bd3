#!/usr/bin/env python3
"""
Brand Price Scraper
Scrapes current prices for every active product URL and records price history
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

from src.scrapers.prices.batch_runner import run_price_scrape
from src.scrapers.prices.config import RunnerConfig
from src.scrapers.prices.orchestrator import PriceExtractionOrchestrator
from src.scrapers.prices.registry import BrandNotConfiguredError, build_registry


def cmd_run(args) -> int:
    try:
        config = RunnerConfig.from_env(
            concurrency=args.concurrency,
            batch_delay=args.delay,
            product_id=args.product_id,
            brand=args.brand,
            selectors_file=args.selectors,
            dry_run=args.dry_run or None,
            headless=False if args.headful else None,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        stats = asyncio.run(run_price_scrape(config))
    except ValueError as e:
        # Missing credentials / invalid setup
        print(f"❌ {e}")
        return 1

    if stats['total'] and stats['error_count'] == stats['total']:
        return 1
    return 0


def cmd_extract(args) -> int:
    html_path = Path(args.html)
    if not html_path.exists():
        print(f"Error: {html_path} not found")
        return 1

    orchestrator = PriceExtractionOrchestrator(build_registry(selectors_file=args.selectors))
    html = html_path.read_text(encoding='utf-8', errors='replace')

    try:
        result = orchestrator.extract_html(args.brand, html, args.url)
    except BrandNotConfiguredError as e:
        print(f"❌ {e}")
        return 2

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.success else 1


def cmd_brands(args) -> int:
    registry = build_registry(selectors_file=args.selectors)
    print(registry)
    print("\nCustom policies:")
    for name in registry.custom_brand_names():
        print(f"  ├─ {name}")
    print("\nSelector table:")
    for name in registry.selector_brand_names():
        selectors = registry.get_selectors(name)
        print(f"  ├─ {name}: {selectors.original}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Brand Price Scraper: extract prices from product pages and record history',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape every active product URL
  python scrape_prices.py run

  # Re-scrape a single product
  python scrape_prices.py run --product-id 3f1c...

  # Only Trendyol URLs, print results without saving
  python scrape_prices.py run --brand Trendyol --dry-run

  # Debug selectors against a saved page
  python scrape_prices.py extract --brand Fropie --html saved_page.html
        """
    )
    parser.add_argument('--selectors',
                        default=None,
                        help='Brand selector JSON file (default: config/brand_selectors.json)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Scrape active product URLs')
    run_parser.add_argument('--product-id',
                            default=None,
                            help='Only scrape URLs of this product (default: PRODUCT_ID env)')
    run_parser.add_argument('--brand', '-b',
                            default=None,
                            help='Only scrape URLs of this brand')
    run_parser.add_argument('--concurrency', '-c',
                            type=int, default=None,
                            help='Pages scraped in parallel per batch (default: 10)')
    run_parser.add_argument('--delay', '-d',
                            type=float, default=None,
                            help='Seconds to wait between batches (default: 1.0)')
    run_parser.add_argument('--dry-run',
                            action='store_true',
                            help='Extract prices without writing to the database')
    run_parser.add_argument('--headful',
                            action='store_true',
                            help='Show the browser window')
    run_parser.set_defaults(func=cmd_run)

    extract_parser = subparsers.add_parser('extract', help='Extract prices from a saved HTML file')
    extract_parser.add_argument('--brand', '-b', required=True, help='Brand name')
    extract_parser.add_argument('--html', required=True, help='Path to saved page HTML')
    extract_parser.add_argument('--url', default=None, help='Original product URL (optional)')
    extract_parser.set_defaults(func=cmd_extract)

    brands_parser = subparsers.add_parser('brands', help='List configured brands')
    brands_parser.set_defaults(func=cmd_brands)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
