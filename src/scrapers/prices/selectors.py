"""
Brand Selector Configuration
Selector tables for brands that need no custom price logic
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

# Resolved from the project root so the table loads from any working directory
DEFAULT_SELECTORS_FILE = Path(__file__).parent.parent.parent.parent / 'config' / 'brand_selectors.json'


@dataclass(frozen=True)
class BrandSelectors:
    """
    Selector specs for the three price roles of one brand.

    Each value is a comma-separated CSS selector list, or None when the brand
    never shows that price.
    """

    original: Optional[str] = None
    discount: Optional[str] = None
    member: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping) -> 'BrandSelectors':
        """Build from a config entry: {'original': ..., 'discount': ..., 'member': ...}"""
        return cls(
            original=data.get('original') or None,
            discount=data.get('discount') or None,
            member=data.get('member') or None,
        )

    @classmethod
    def from_brand_row(cls, row: Mapping) -> Optional['BrandSelectors']:
        """
        Build from a brands table row.

        original_price_selector falls back to the legacy price_selector column.

        Returns:
            BrandSelectors, or None if the row has no usable original/discount selector
        """
        selectors = cls(
            original=row.get('original_price_selector') or row.get('price_selector') or None,
            discount=row.get('discount_price_selector') or None,
            member=row.get('member_price_selector') or None,
        )
        if not selectors.original and not selectors.discount:
            return None
        return selectors


def _get_default_selectors() -> Dict[str, BrandSelectors]:
    """Built-in selector table used when no config file is available"""
    return {
        'Aroha Çikolata': BrandSelectors(original='.urun_kdvdahil_fiyati'),
        'bahs': BrandSelectors(original='.price'),
        'Bite & More': BrandSelectors(original='.price, .product-price'),
        'Corny': BrandSelectors(original='.price'),
        'Delly': BrandSelectors(original='.spanFiyat'),
        "Kellog's": BrandSelectors(original='.price'),
        "Mom's Granola": BrandSelectors(original='.text-button-02, .font-medium.text-button-02'),
        'Naturiga': BrandSelectors(original='.n9-fbt-product-price-final'),
        'Patiswiss': BrandSelectors(original='.price'),
        'Protein Ocean': BrandSelectors(original='.font-bold.text-black, div[class*="font-bold"]'),
        'Rawsome': BrandSelectors(original='.product-price--original'),
        "Vegeat's": BrandSelectors(original='.price'),
        'Waspco': BrandSelectors(original='.product-price--original'),
        'Yummate': BrandSelectors(original='.price'),
    }


def load_selector_table(config_path: Optional[str] = None) -> Dict[str, BrandSelectors]:
    """
    Load the brand selector table from JSON.

    File format:
        {"brands": {"Corny": {"original": ".price", "discount": null, "member": null}, ...}}

    Entries in the file override the built-in defaults brand by brand.

    Args:
        config_path: Path to the JSON file (default: config/brand_selectors.json)

    Returns:
        Dict mapping brand name to BrandSelectors
    """
    table = _get_default_selectors()
    path = Path(config_path or DEFAULT_SELECTORS_FILE)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"⚠️  Selector file '{path}' not found, using built-in selectors")
        return table
    except json.JSONDecodeError as e:
        print(f"⚠️  Error parsing selector file: {e}, using built-in selectors")
        return table

    for brand_name, entry in data.get('brands', {}).items():
        if isinstance(entry, dict):
            table[brand_name] = BrandSelectors.from_mapping(entry)

    return table


def merge_brand_rows(table: Dict[str, BrandSelectors], brand_rows) -> Dict[str, BrandSelectors]:
    """
    Overlay selectors stored on brands table rows onto a selector table.

    Rows without selectors leave the table untouched.
    """
    merged = dict(table)
    for row in brand_rows or []:
        name = row.get('name')
        if not name:
            continue
        selectors = BrandSelectors.from_brand_row(row)
        if selectors:
            merged[name] = selectors
    return merged
