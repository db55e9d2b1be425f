"""
Tests for the per-portion economics projection.
"""

import pytest

from services import project_economics


def test_cost_per_portion_only():
    result = project_economics(12.0, 4)
    assert result.cost_per_portion == 3.0
    assert result.margin_per_portion is None
    assert result.goods_share_percent is None


def test_margin_and_goods_share():
    result = project_economics(12.0, 4, 5.0)
    assert result.cost_per_portion == 3.0
    assert result.margin_per_portion == 2.0
    assert result.goods_share_percent == pytest.approx(60.0)


def test_negative_margin_is_reported_as_is():
    result = project_economics(30.0, 5, 4.0)
    assert result.margin_per_portion == -2.0
    assert result.goods_share_percent == pytest.approx(150.0)


def test_no_rounding():
    result = project_economics(10.0, 3)
    assert result.cost_per_portion == 10.0 / 3


@pytest.mark.parametrize('portions', [None, 0, -1, float('nan'), float('inf'), 'x'])
def test_invalid_portions(portions):
    assert project_economics(12.0, portions, 5.0) == (None, None, None)


@pytest.mark.parametrize('price', [None, 0, -5, float('nan')])
def test_invalid_sales_price(price):
    assert project_economics(12.0, 4, price) == (3.0, None, None)


def test_string_inputs_with_decimal_comma():
    result = project_economics('12,0', '4', '5,00')
    assert result == (3.0, 2.0, pytest.approx(60.0))


def test_zero_cost_is_valid():
    assert project_economics(0.0, 4, 5.0) == (0.0, 5.0, 0.0)
