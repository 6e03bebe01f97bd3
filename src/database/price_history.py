"""
Price history persistence in Supabase
Reads active product URLs, appends price history and keeps scrape job bookkeeping
"""
import os
from datetime import datetime, timezone
from typing import Dict, List, Optional

from dotenv import load_dotenv
from supabase import Client, create_client

from src.scrapers.prices.result import PriceResult

load_dotenv()

PRODUCT_URL_COLUMNS = (
    'id, url, product_id, brand_id, '
    'brands(id, name, domain, price_selector, original_price_selector, '
    'discount_price_selector, member_price_selector)'
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_supabase_client() -> Client:
    """
    Create a Supabase client from the environment.

    Uses SUPABASE_SERVICE_ROLE_KEY, falling back to SUPABASE_KEY.

    Raises:
        ValueError: If URL or key are missing
    """
    supabase_url = os.getenv('SUPABASE_URL')
    supabase_key = os.getenv('SUPABASE_SERVICE_ROLE_KEY') or os.getenv('SUPABASE_KEY')

    if not supabase_url or not supabase_key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment")

    return create_client(supabase_url, supabase_key)


def fetch_active_product_urls(supabase: Client, product_id: Optional[str] = None) -> List[Dict]:
    """
    Get active product URLs together with their brand row.

    Args:
        supabase: Supabase client
        product_id: Limit to the URLs of one product (single product re-scrape)

    Returns:
        List of product_urls rows, each with a nested 'brands' dict
    """
    query = supabase.table('product_urls').select(PRODUCT_URL_COLUMNS).eq('is_active', True)
    if product_id:
        query = query.eq('product_id', product_id)
    result = query.execute()
    return result.data or []


def fetch_brand_rows(supabase: Client) -> List[Dict]:
    """Get all brands with their selector columns"""
    result = supabase.table('brands').select(
        'id, name, domain, price_selector, original_price_selector, '
        'discount_price_selector, member_price_selector'
    ).execute()
    return result.data or []


def create_scrape_job(supabase: Client, total_products: int, triggered_by: Optional[str] = None) -> Optional[str]:
    """
    Insert a running scrape job.

    Returns:
        Job ID, or None if the insert failed (the run continues without bookkeeping)
    """
    try:
        result = supabase.table('scrape_jobs').insert({
            'status': 'running',
            'triggered_by': triggered_by,
            'total_products': total_products,
            'started_at': _now(),
        }).execute()
    except Exception as e:
        print(f"⚠️  Error creating scrape job: {e}")
        return None

    if result.data:
        return result.data[0].get('id')
    return None


def finish_scrape_job(supabase: Client, job_id: Optional[str], total: int, scraped_count: int,
                      error_count: int, error_message: Optional[str] = None) -> None:
    """
    Close a scrape job.

    The job is 'failed' when every item errored or the run aborted with error_message.
    """
    if not job_id:
        return

    failed = error_message is not None or (total > 0 and error_count == total)
    update = {
        'status': 'failed' if failed else 'completed',
        'scraped_count': scraped_count,
        'error_count': error_count,
        'completed_at': _now(),
    }
    if error_message:
        update['error_message'] = error_message

    try:
        supabase.table('scrape_jobs').update(update).eq('id', job_id).execute()
    except Exception as e:
        print(f"⚠️  Error updating scrape job {job_id}: {e}")


def save_price_data(supabase: Client, product_url: Dict, result: PriceResult) -> bool:
    """
    Append a price history row and refresh the product URL's current prices.

    The current-price snapshot is only overwritten when an original price was found.

    Args:
        supabase: Supabase client
        product_url: product_urls row (needs 'id')
        result: Extraction result for this URL

    Returns:
        True if the history row was written
    """
    scraped_at = _now()
    history_row = {
        'product_url_id': product_url['id'],
        **result.to_record(),
        'scraped_at': scraped_at,
    }

    saved = True
    try:
        supabase.table('price_history').insert(history_row).execute()
    except Exception as e:
        print(f"  ├─ ⚠️  Error saving to history: {e}")
        saved = False

    if result.original_price is not None:
        try:
            supabase.table('product_urls').update({
                'original_price': result.original_price,
                'discount_price': result.discount_price,
                'member_price': result.member_price,
                'last_price': result.original_price,
                'last_scraped_at': scraped_at,
            }).eq('id', product_url['id']).execute()
        except Exception as e:
            print(f"  ├─ ⚠️  Error updating product URL {product_url['id']}: {e}")

    return saved
