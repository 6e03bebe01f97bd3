"""
Tests for the brand price policies, one scenario per page layout
"""

import pytest

from src.scrapers.prices.brands import (
    CompareAtPolicy,
    FellasPolicy,
    MarketplaceTierPolicy,
    SelectorTablePolicy,
    ServetPolicy,
    TwoSpanDiscountPolicy,
    WefoodPolicy,
    ZuberPolicy,
)
from src.scrapers.prices.document import PageDocument
from src.scrapers.prices.result import PriceResult
from src.scrapers.prices.selectors import BrandSelectors


def doc(html):
    return PageDocument.from_html(html)


# ---------------------------------------------------------------------------
# Selector table
# ---------------------------------------------------------------------------

def test_selector_table_reads_all_three_roles():
    policy = SelectorTablePolicy('Demo', BrandSelectors(original='.old', discount='.new', member='.club'))
    result = policy.extract(doc(
        '<span class="old">300 TL</span><span class="new">250 TL</span><span class="club">230 TL</span>'
    ))
    assert result == PriceResult(original_price=300.0, discount_price=250.0, member_price=230.0)


def test_selector_table_promotes_discount_when_original_missing():
    policy = SelectorTablePolicy('Demo', BrandSelectors(original='.old', discount='.new', member='.club'))
    result = policy.extract(doc('<span class="new">250 TL</span><span class="club">230 TL</span>'))
    assert result == PriceResult(original_price=250.0, discount_price=None, member_price=230.0)


def test_selector_table_error_names_brand_and_selectors():
    policy = SelectorTablePolicy('Corny', BrandSelectors(original='.price'))
    result = policy.extract(doc('<p>nothing here</p>'))
    assert result.error == 'No price found for Corny with selectors: .price'
    assert result.original_price is None
    assert result.discount_price is None
    assert result.member_price is None


def test_fellas_id_selectors():
    result = FellasPolicy().extract(doc(
        '<div id="fiyat"><span class="spanFiyat">250,00 TL</span></div>'
        '<div id="indirimliFiyat"><span class="spanFiyat">199,90 TL</span></div>'
    ))
    assert result == PriceResult(original_price=250.0, discount_price=199.9)


def test_fellas_discount_only_becomes_original():
    result = FellasPolicy().extract(doc(
        '<div id="indirimliFiyat"><span class="spanFiyat">199,90 TL</span></div>'
    ))
    assert result == PriceResult(original_price=199.9)


def test_wefood_campaign_price():
    result = WefoodPolicy().extract(doc(
        '<div class="price__regular"><span class="price-item--regular">400,00 TL</span></div>'
        '<span class="price-item-discount">240,00 TL</span>'
    ))
    assert result == PriceResult(original_price=400.0, discount_price=240.0)


def test_wefood_does_not_promote_campaign_price():
    result = WefoodPolicy().extract(doc('<span class="price-item-discount">240,00 TL</span>'))
    assert result.error == 'No price found on Wefood page'


# ---------------------------------------------------------------------------
# Two-span discount (Fropie, uniq2go)
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('brand', ['Fropie', 'uniq2go'])
def test_two_span_discount(brand):
    result = TwoSpanDiscountPolicy(brand).extract(doc(
        '<div class="discount-price"><span>650 TL</span> <span>520 TL</span></div>'
    ))
    assert result == PriceResult(original_price=650.0, discount_price=520.0)


def test_two_span_equal_values_fall_back_to_single_price():
    result = TwoSpanDiscountPolicy('Fropie').extract(doc(
        '<div class="price-main">100 TL</div>'
        '<div class="discount-price"><span>100</span> <span>100</span></div>'
    ))
    assert result == PriceResult(original_price=100.0)


def test_two_span_reversed_values_fall_back_to_single_price():
    result = TwoSpanDiscountPolicy('Fropie').extract(doc(
        '<div class="price-main">520 TL</div>'
        '<div class="discount-price"><span>520</span> <span>650</span></div>'
    ))
    assert result == PriceResult(original_price=520.0)


def test_two_span_single_price_container():
    result = TwoSpanDiscountPolicy('uniq2go').extract(doc(
        '<div class="discount-price"><span>189,90 TL</span></div>'
    ))
    assert result == PriceResult(original_price=189.9)


def test_two_span_no_price():
    result = TwoSpanDiscountPolicy('uniq2go').extract(doc('<div class="other">1</div>'))
    assert result.error == 'No price found on uniq2go page'


# ---------------------------------------------------------------------------
# Inverted naming (Züber, Servet)
# ---------------------------------------------------------------------------

def test_zuber_compare_is_original_and_original_class_is_sale():
    result = ZuberPolicy().extract(doc(
        '<div class="product-price--compare"><span>450,00 TL</span></div>'
        '<div class="product-price--original">360,00 TL</div>'
    ))
    assert result == PriceResult(original_price=450.0, discount_price=360.0)


def test_zuber_without_discount():
    result = ZuberPolicy().extract(doc(
        '<div class="product-price--compare"><span></span></div>'
        '<div class="product-price--original">399,90 TL</div>'
    ))
    assert result == PriceResult(original_price=399.9)


def test_zuber_compare_alone_is_not_enough():
    result = ZuberPolicy().extract(doc(
        '<div class="product-price--compare"><span>450,00 TL</span></div>'
    ))
    assert result.error == 'No prices found on Züber page'


def test_servet_reads_first_compare_span():
    result = ServetPolicy().extract(doc(
        '<div class="product-price--compare"><span>500 TL</span><span>%20</span></div>'
        '<div class="product-price--original">400 TL</div>'
    ))
    assert result == PriceResult(original_price=500.0, discount_price=400.0)


# ---------------------------------------------------------------------------
# Compare-at / sale (SAF)
# ---------------------------------------------------------------------------

def saf():
    return CompareAtPolicy('Saf', label='SAF')


def test_compare_at_discount():
    result = saf().extract(doc(
        '<compare-at-price>₺316,00</compare-at-price><sale-price>₺221,00</sale-price>'
    ))
    assert result == PriceResult(original_price=316.0, discount_price=221.0)


def test_compare_at_not_above_sale_is_ignored():
    result = saf().extract(doc(
        '<compare-at-price>₺221,00</compare-at-price><sale-price>₺221,00</sale-price>'
    ))
    assert result == PriceResult(original_price=221.0)


def test_compare_at_without_sale_price():
    result = saf().extract(doc('<compare-at-price>₺316,00</compare-at-price>'))
    assert result.error == 'No price found on SAF page'


# ---------------------------------------------------------------------------
# Marketplace tiers (Trendyol)
# ---------------------------------------------------------------------------

def trendyol_page(crossed=None, plus_original=None, plus_member=None, regular=None, outside=''):
    parts = []
    if crossed:
        parts.append(f'<span class="prc-org">{crossed} TL</span>')
    if plus_original:
        parts.append(f'<span class="ty-plus-price-original-price">{plus_original} TL</span>')
    if plus_member:
        parts.append(f'<span class="ty-plus-price-discounted-price">{plus_member} TL</span>')
    if regular:
        parts.append(f'<span class="prc-dsc">{regular} TL</span>')
    return doc(
        '<html><body>'
        f'<div class="productDetailWrapper">{"".join(parts)}</div>'
        f'<div class="recommendations">{outside}</div>'
        '</body></html>'
    )


def test_trendyol_crossed_out_with_plus_pricing():
    result = MarketplaceTierPolicy().extract(
        trendyol_page(crossed='200', plus_original='134,42', plus_member='120,98')
    )
    assert result == PriceResult(original_price=200.0, discount_price=134.42, member_price=120.98)


def test_trendyol_plus_pricing_only():
    result = MarketplaceTierPolicy().extract(trendyol_page(plus_original='219', plus_member='208,05'))
    assert result == PriceResult(original_price=219.0, member_price=208.05)


def test_trendyol_crossed_out_with_regular_discount():
    result = MarketplaceTierPolicy().extract(trendyol_page(crossed='649', regular='520'))
    assert result == PriceResult(original_price=649.0, discount_price=520.0)


def test_trendyol_single_price():
    result = MarketplaceTierPolicy().extract(trendyol_page(regular='211'))
    assert result == PriceResult(original_price=211.0)


def test_trendyol_rejects_plus_pair_far_from_regular_price():
    result = MarketplaceTierPolicy().extract(
        trendyol_page(crossed='350', plus_original='100', plus_member='90', regular='300')
    )
    assert result == PriceResult(original_price=350.0, discount_price=300.0)


def test_trendyol_rejected_plus_pair_without_crossed_out():
    result = MarketplaceTierPolicy().extract(
        trendyol_page(plus_original='100', plus_member='90', regular='300')
    )
    assert result == PriceResult(original_price=300.0)


def test_trendyol_accepts_plus_pair_close_to_regular_price():
    result = MarketplaceTierPolicy().extract(
        trendyol_page(crossed='200', plus_original='134,42', plus_member='120,98', regular='140')
    )
    assert result == PriceResult(original_price=200.0, discount_price=134.42, member_price=120.98)


def test_trendyol_fallback_to_crossed_out():
    result = MarketplaceTierPolicy().extract(trendyol_page(crossed='200'))
    assert result == PriceResult(original_price=200.0)


def test_trendyol_fallback_to_plus_original_without_member():
    result = MarketplaceTierPolicy().extract(trendyol_page(plus_original='134,42'))
    assert result == PriceResult(original_price=134.42)


def test_trendyol_ignores_prices_outside_product_area():
    result = MarketplaceTierPolicy().extract(trendyol_page(
        regular='211',
        outside='<span class="prc-org">999 TL</span><span class="prc-dsc">888 TL</span>',
    ))
    assert result == PriceResult(original_price=211.0)


def test_trendyol_without_product_area_searches_body():
    result = MarketplaceTierPolicy().extract(doc(
        '<html><body><div><span class="prc-dsc">211 TL</span></div></body></html>'
    ))
    assert result == PriceResult(original_price=211.0)


def test_trendyol_no_price():
    result = MarketplaceTierPolicy().extract(trendyol_page())
    assert result.error == 'No price found on Trendyol page'


@pytest.mark.parametrize('plus_original, plus_member, regular, expected', [
    (100, 90, None, True),
    (100, 90, 300, False),
    (100, 90, 120, True),
    (100, 90, 200, False),
    (100, 90, 199, True),
    (100, None, None, False),
    (None, 90, None, False),
])
def test_trendyol_plus_validation(plus_original, plus_member, regular, expected):
    assert MarketplaceTierPolicy.is_plus_valid(plus_original, plus_member, regular) is expected


def test_trendyol_matches_its_domain():
    policy = MarketplaceTierPolicy()
    assert policy.matches_url('https://www.trendyol.com/corny/bar-p-123')
    assert not policy.matches_url('https://example.com/p/1')
