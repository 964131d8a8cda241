"""
Checkout arithmetic and product discount pricing
"""
import pytest

from foody.database.models import Product, DiscountType
from foody.services.pricing import round_half_up, compute_tax, compute_totals
from foody.services.stats_service import growth


def test_tax_rounds_half_up():
    """250 * 5% = 12.5 must round to 13, not to 12"""
    assert compute_tax(250) == 13


def test_totals_for_two_items_at_300():
    subtotal, tax, total = compute_totals([(300, 2)])
    assert (subtotal, tax, total) == (600, 30, 630)


def test_totals_sum_every_line():
    subtotal, tax, total = compute_totals([(120, 1), (85.5, 2)])
    assert subtotal == pytest.approx(291)
    assert tax == 15
    assert total == pytest.approx(subtotal + tax)


@pytest.mark.parametrize("value, digits, expected", [
    (12.5, 0, 13),
    (12.49, 0, 12),
    (4.25, 1, 4.3),
    (3.666, 1, 3.7),
])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == pytest.approx(expected)


def test_growth_is_none_without_a_baseline():
    assert growth(500, 0) is None


def test_growth_percentage():
    assert growth(150, 100) == 50.0
    assert growth(50, 200) == -75.0


def _product(**fields):
    defaults = {"name": "Thali", "price": 200.0, "discount_type": DiscountType.NONE, "discount_value": 0.0}
    defaults.update(fields)
    return Product(**defaults)


def test_final_price_without_discount():
    product = _product()
    assert product.final_price == 200.0
    assert product.savings_amount == 0
    assert product.savings_percentage == 0


def test_final_price_percentage_discount():
    product = _product(discount_type=DiscountType.PERCENTAGE, discount_value=15)
    assert product.final_price == 170.0
    assert product.savings_amount == 30.0
    assert product.savings_percentage == 15.0


def test_final_price_fixed_discount_never_negative():
    assert _product(discount_type=DiscountType.FIXED, discount_value=50).final_price == 150.0
    assert _product(discount_type=DiscountType.FIXED, discount_value=500).final_price == 0.0


def test_final_price_combo_uses_combo_price():
    assert _product(discount_type=DiscountType.COMBO, combo_price=180.0).final_price == 180.0
    assert _product(discount_type=DiscountType.COMBO, combo_price=0.0).final_price == 200.0


def test_negative_price_is_rejected():
    with pytest.raises(ValueError):
        _product(price=-1.0)
