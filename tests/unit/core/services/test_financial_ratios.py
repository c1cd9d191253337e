"""재무 비율 함수 테스트."""

from decimal import Decimal

import pytest

from core.services.financial_ratios import (
    calculate_change,
    calculate_margin,
    cash_runway_months,
    cost_ratio,
    operating_margin,
    payroll_ratio,
)

ZERO = Decimal("0")


def test_ratios_against_revenue():
    revenue = Decimal("10000000")

    assert cost_ratio(Decimal("4000000"), revenue) == Decimal("40")
    assert payroll_ratio(Decimal("2500000"), revenue) == Decimal("25")
    assert operating_margin(revenue, Decimal("3000000"), Decimal("2000000")) == Decimal("50")


def test_ratios_return_zero_without_revenue():
    """매출이 0이면 NaN 대신 0."""
    assert cost_ratio(Decimal("100"), ZERO) == ZERO
    assert payroll_ratio(Decimal("100"), ZERO) == ZERO
    assert operating_margin(ZERO, Decimal("100"), Decimal("100")) == ZERO


def test_operating_margin_can_be_negative():
    assert operating_margin(Decimal("100"), Decimal("150"), ZERO) == Decimal("-50")


def test_cash_runway_scenario():
    """현금 3천만 / 월 소진 1천만 = 3개월."""
    assert cash_runway_months(Decimal("30000000"), Decimal("10000000")) == Decimal("3")


@pytest.mark.parametrize("burn", [ZERO, Decimal("-1")])
def test_cash_runway_is_undefined_without_burn(burn):
    assert cash_runway_months(Decimal("30000000"), burn) is None


def test_calculate_margin():
    assert calculate_margin(Decimal("200"), Decimal("50")) == Decimal("75")
    assert calculate_margin(ZERO, Decimal("50")) == ZERO
    assert calculate_margin(Decimal("-10"), Decimal("50")) == ZERO


def test_calculate_change():
    assert calculate_change(Decimal("150"), Decimal("100")) == Decimal("50")
    assert calculate_change(Decimal("50"), Decimal("100")) == Decimal("-50")
    assert calculate_change(Decimal("10"), ZERO) == Decimal("100")
    assert calculate_change(ZERO, ZERO) == ZERO
