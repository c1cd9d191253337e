"""손익계산서 서비스."""

import logging
from decimal import Decimal
from typing import Dict

from core.domain.models.financial_insights import IncomeStatement
from core.domain.models.ledger import ZERO
from core.domain.models.period_data import MonthData
from core.domain.models.reporting_period import ReportingPeriod
from core.services.balance_sheet_service import sum_amounts
from core.services.financial_ratios import calculate_change, calculate_margin
from core.services.report_config import ReportConfig

logger = logging.getLogger(__name__)

# 전월 대비 비교 대상 항목
COMPARED_FIELDS = (
    "total_revenue",
    "hpp_expenses",
    "gross_profit",
    "total_operating_expenses",
    "operating_profit",
    "net_profit",
)


class IncomeStatementService:
    """단일 월 손익계산서를 산출하는 서비스.

    - 매출: 주요 유형(retainer, project, event)과 기타로 구분
    - 지출: HPP 우선 분류 후 나머지를 설정된 그룹(sdm, marketing, it, administrasi, other)으로 분류
    - 급여는 sdm 그룹에 합산
    """

    def __init__(self, config: ReportConfig):
        self._config = config

    def build_income_statement(self, data: MonthData, period: ReportingPeriod) -> IncomeStatement:
        main_types = self._config.main_income_types
        main_revenue = sum_amounts(i for i in data.received_income if i.type in main_types)
        other_revenue = sum_amounts(i for i in data.received_income if i.type not in main_types)
        total_revenue = main_revenue + other_revenue

        groups: Dict[str, Decimal] = {}
        for expense in data.paid_expenses:
            group = self._config.expense_group(expense.category, expense.sub_category)
            groups[group] = groups.get(group, ZERO) + expense.amount

        hpp_expenses = groups.get("hpp", ZERO)
        gross_profit = total_revenue - hpp_expenses

        sdm_expenses = groups.get("sdm", ZERO) + sum_amounts(data.paid_payroll)
        marketing_expenses = groups.get("marketing", ZERO)
        it_expenses = groups.get("it", ZERO)
        admin_expenses = groups.get("administrasi", ZERO)
        # 설정에 없는 그룹명도 기타로 합산
        other_expenses = sum(
            (amount for group, amount in groups.items()
             if group not in ("hpp", "sdm", "marketing", "it", "administrasi")),
            ZERO,
        )

        total_operating_expenses = (
            sdm_expenses + marketing_expenses + it_expenses + admin_expenses + other_expenses
        )
        operating_profit = gross_profit - total_operating_expenses
        net_profit = operating_profit

        logger.info(f"{period.month_key} 손익계산서 산출: 매출={total_revenue}, 영업이익={operating_profit}")

        return IncomeStatement(
            year=period.year,
            month=period.month,
            main_revenue=main_revenue,
            other_revenue=other_revenue,
            total_revenue=total_revenue,
            hpp_expenses=hpp_expenses,
            gross_profit=gross_profit,
            sdm_expenses=sdm_expenses,
            marketing_expenses=marketing_expenses,
            it_expenses=it_expenses,
            admin_expenses=admin_expenses,
            other_expenses=other_expenses,
            total_operating_expenses=total_operating_expenses,
            operating_profit=operating_profit,
            net_profit=net_profit,
            gross_margin=calculate_margin(total_revenue, hpp_expenses),
            operating_margin=calculate_margin(total_revenue, total_revenue - operating_profit),
            net_margin=calculate_margin(total_revenue, total_revenue - net_profit),
        )

    @staticmethod
    def compare(current: IncomeStatement, previous: IncomeStatement) -> Dict[str, Decimal]:
        """전월 대비 증감률 (%)."""
        return {
            name: calculate_change(getattr(current, name), getattr(previous, name))
            for name in COMPARED_FIELDS
        }
