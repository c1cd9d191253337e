"""월간 재무 인사이트 서비스."""

import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from core.domain.models.financial_insights import FinancialInsights, MarginItem
from core.domain.models.ledger import ZERO, IncomeRecord
from core.domain.models.period_data import MonthData
from core.domain.models.reporting_period import ReportingPeriod
from core.services.account_classifier import AccountClassifier
from core.services.balance_sheet_service import sum_amounts
from core.services.financial_ratios import (
    calculate_margin,
    cash_runway_months,
    cost_ratio,
    operating_margin,
    payroll_ratio,
)
from core.services.report_config import ReportConfig

logger = logging.getLogger(__name__)

TOP_MARGIN_COUNT = 10


class FinanceInsightService:
    """단일 월 데이터로 핵심 비율과 마진 분석을 산출하는 서비스."""

    def __init__(self, config: ReportConfig, classifier: Optional[AccountClassifier] = None):
        self._config = config
        self._classifier = classifier or AccountClassifier(config.account_table)

    def build_insights(
        self,
        data: MonthData,
        period: ReportingPeriod,
        cash_balance: Optional[Decimal] = None
    ) -> FinancialInsights:
        """인사이트 생성.

        Args:
            data: 해당 월 입금 수입, 지급 지출, 지급 급여
            period: 기준 월
            cash_balance: 현금 잔액. None이면 가장 최근 현금(1110) 수기 항목 사용
        """
        total_revenue = sum_amounts(data.received_income)
        total_expenses = sum_amounts(data.paid_expenses)
        total_payroll = sum_amounts(data.paid_payroll)
        total_hpp = sum_amounts(
            e for e in data.paid_expenses if self._config.hpp_rule.matches(e.category, e.sub_category)
        )

        if cash_balance is None:
            cash_balance = self._classifier.latest_amount(data.manual_items, data.accounts, "cash_bank")
        monthly_burn = total_expenses + total_payroll

        logger.info(
            f"{period.month_key} 인사이트 산출: 매출={total_revenue}, 지출={total_expenses}, 급여={total_payroll}"
        )

        return FinancialInsights(
            year=period.year,
            month=period.month,
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            total_payroll=total_payroll,
            total_hpp=total_hpp,
            cost_ratio=cost_ratio(total_hpp, total_revenue),
            payroll_ratio=payroll_ratio(total_payroll, total_revenue),
            operating_margin=operating_margin(total_revenue, total_expenses, total_payroll),
            cash_balance=cash_balance,
            monthly_burn=monthly_burn,
            cash_runway_months=cash_runway_months(cash_balance, monthly_burn),
            client_margins=self._margins(
                data,
                key=lambda r: r.client_id,
                name=lambda r: r.client_name,
            ),
            project_margins=self._margins(
                data,
                key=lambda r: r.project_id,
                name=lambda r: r.project_title,
            ),
            revenue_by_type=self._revenue_by_type(data.received_income),
        )

    def _margins(
        self,
        data: MonthData,
        key: Callable,
        name: Callable
    ) -> List[MarginItem]:
        """그룹별 마진 (매출 상위 10개).

        수입이 있는 그룹에만 지출을 원가로 배분한다. id가 없는 행은 제외.
        """
        revenue: Dict[str, Decimal] = {}
        cost: Dict[str, Decimal] = {}
        names: Dict[str, str] = {}

        for income in data.received_income:
            group_id = key(income)
            if not group_id:
                continue
            revenue[group_id] = revenue.get(group_id, ZERO) + income.amount
            cost.setdefault(group_id, ZERO)
            names.setdefault(group_id, name(income) or "Unknown")

        for expense in data.paid_expenses:
            group_id = key(expense)
            if group_id and group_id in revenue:
                cost[group_id] += expense.amount

        items = [
            MarginItem(
                id=group_id,
                name=names[group_id],
                revenue=revenue[group_id],
                cost=cost[group_id],
                profit=revenue[group_id] - cost[group_id],
                margin=calculate_margin(revenue[group_id], cost[group_id]),
            )
            for group_id in revenue
        ]
        items.sort(key=lambda item: item.revenue, reverse=True)
        return items[:TOP_MARGIN_COUNT]

    @staticmethod
    def _revenue_by_type(income: List[IncomeRecord]) -> Dict[str, Decimal]:
        by_type: Dict[str, Decimal] = {}
        for record in income:
            by_type[record.type] = by_type.get(record.type, ZERO) + record.amount
        return by_type
