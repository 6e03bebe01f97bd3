"""
Price Parsing Utilities
Turns scraped price text into numbers, handling Turkish and international formats
"""

import re
from typing import Optional

PRICE_TOKEN_PATTERN = re.compile(r'[0-9,.]+')

# Mirrors the leading-prefix behaviour of a lenient float parse: "1.234" -> 1.234, "5." -> 5.0
LEADING_FLOAT_PATTERN = re.compile(r'[0-9]+(?:\.[0-9]*)?|\.[0-9]+')


def _leading_float(text: str) -> Optional[float]:
    match = LEADING_FLOAT_PATTERN.match(text.strip())
    if not match:
        return None
    return float(match.group(0))


def parse_price(text) -> Optional[float]:
    """
    Parse a price from scraped text.

    The last number in the text wins, since pages often render
    "219 TL Sepette 208,05 TL" with the actual price at the end.

    Separator rules:
    - Both ',' and '.': whichever comes last is the decimal separator
      (1.234,56 Turkish, 1,234.56 international)
    - Only ',': decimal separator (Turkish)
    - Only '.': decimal when exactly one dot with two digits after it,
      otherwise a thousands separator

    Args:
        text: Raw text content of a price element

    Returns:
        Parsed price, or None when nothing parseable is present
    """
    if not text or not isinstance(text, str):
        return None

    matches = PRICE_TOKEN_PATTERN.findall(text)
    if not matches:
        return None

    token = matches[-1]

    if ',' in token and '.' in token:
        if token.rfind(',') > token.rfind('.'):
            # Turkish: 1.234,56
            token = token.replace('.', '').replace(',', '.', 1)
        else:
            # International: 1,234.56
            token = token.replace(',', '')
    elif ',' in token:
        token = token.replace(',', '.', 1)
    elif '.' in token:
        parts = token.split('.')
        if not (len(parts) == 2 and len(parts[1]) == 2):
            token = token.replace('.', '')

    return _leading_float(token)


def try_selectors(document, selector_spec: Optional[str]) -> Optional[float]:
    """
    Try a comma-separated list of selectors and return the first parseable price.

    Candidates are tried left to right. A candidate that matches an element
    with empty or unparseable text falls through to the next one.

    Args:
        document: PageDocument (or scoped PageDocument) to search
        selector_spec: e.g. ".price-old, .original-price"; None/empty opts out

    Returns:
        First parsed price, or None
    """
    if not selector_spec:
        return None

    selectors = [s.strip() for s in selector_spec.split(',')]

    for selector in selectors:
        if not selector:
            continue
        element = document.select_first(selector)
        if element is None:
            continue
        text = document.text_of(element)
        if text:
            price = parse_price(text)
            if price is not None:
                return price

    return None
