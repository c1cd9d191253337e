"""재무 비율 계산 함수.

모두 순수 함수이며, 분모가 0이면 0(또는 정의된 sentinel)을 반환한다.
"""

from decimal import Decimal
from typing import Optional

from core.domain.models.ledger import ZERO

HUNDRED = Decimal("100")


def _percent_of(part: Decimal, whole: Decimal) -> Decimal:
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def cost_ratio(total_hpp: Decimal, total_revenue: Decimal) -> Decimal:
    """HPP / 매출 (%)."""
    return _percent_of(total_hpp, total_revenue)


def payroll_ratio(total_payroll: Decimal, total_revenue: Decimal) -> Decimal:
    """급여 / 매출 (%)."""
    return _percent_of(total_payroll, total_revenue)


def operating_margin(
    total_revenue: Decimal,
    total_expenses: Decimal,
    total_payroll: Decimal
) -> Decimal:
    """(매출 - 지출 - 급여) / 매출 (%)."""
    return _percent_of(total_revenue - total_expenses - total_payroll, total_revenue)


def cash_runway_months(cash_balance: Decimal, monthly_burn: Decimal) -> Optional[Decimal]:
    """현금으로 버틸 수 있는 개월 수.

    Returns:
        월 소진액이 0 이하이면 None (정의되지 않음)
    """
    if monthly_burn <= 0:
        return None
    return cash_balance / monthly_burn


def calculate_margin(revenue: Decimal, cost: Decimal) -> Decimal:
    """(매출 - 원가) / 매출 (%). 매출이 0 이하이면 0."""
    if revenue <= 0:
        return ZERO
    return (revenue - cost) / revenue * HUNDRED


def calculate_change(current: Decimal, previous: Decimal) -> Decimal:
    """전기 대비 증감률 (%)."""
    if previous == 0:
        return HUNDRED if current > 0 else ZERO
    return (current - previous) / previous * HUNDRED
