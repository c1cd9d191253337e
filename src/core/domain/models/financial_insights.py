"""재무 인사이트 및 손익계산서 모델."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional


@dataclass(frozen=True)
class MarginItem:
    """거래처/프로젝트별 마진."""
    id: str
    name: str
    revenue: Decimal
    cost: Decimal
    profit: Decimal
    margin: Decimal


@dataclass(frozen=True)
class FinancialInsights:
    """단일 월 재무 인사이트.

    Attributes:
        total_hpp: 매출원가(HPP)로 분류된 지출 합계
        cost_ratio: HPP / 매출 (%)
        payroll_ratio: 급여 / 매출 (%)
        operating_margin: (매출 - 지출 - 급여) / 매출 (%)
        cash_runway_months: 현금 / 월 소진액. 소진액이 0 이하이면 None
    """
    year: int
    month: int
    total_revenue: Decimal
    total_expenses: Decimal
    total_payroll: Decimal
    total_hpp: Decimal
    cost_ratio: Decimal
    payroll_ratio: Decimal
    operating_margin: Decimal
    cash_balance: Decimal
    monthly_burn: Decimal
    cash_runway_months: Optional[Decimal]
    client_margins: List[MarginItem] = field(default_factory=list)
    project_margins: List[MarginItem] = field(default_factory=list)
    revenue_by_type: Dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class IncomeStatement:
    """단일 월 손익계산서."""
    year: int
    month: int
    main_revenue: Decimal
    other_revenue: Decimal
    total_revenue: Decimal
    hpp_expenses: Decimal
    gross_profit: Decimal
    sdm_expenses: Decimal  # 급여 포함
    marketing_expenses: Decimal
    it_expenses: Decimal
    admin_expenses: Decimal
    other_expenses: Decimal
    total_operating_expenses: Decimal
    operating_profit: Decimal
    net_profit: Decimal
    gross_margin: Decimal
    operating_margin: Decimal
    net_margin: Decimal
