"""대차대조표 집계 서비스."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from core.domain.models.balance_sheet import BalanceSheet
from core.domain.models.ledger import ZERO
from core.domain.models.period_data import PeriodData
from core.services.account_classifier import AccountClassifier
from core.services.report_config import ReportConfig

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = Decimal("0.01")


def sum_amounts(records: Iterable) -> Decimal:
    """amount 속성 합계 (Decimal, 중간 반올림 없음)."""
    return sum((record.amount for record in records), ZERO)


def is_balanced(sheet: BalanceSheet, tolerance: Decimal = DEFAULT_TOLERANCE) -> bool:
    """자산 총계와 부채+자본 총계가 허용오차 안에서 일치하는지 확인."""
    return abs(sheet.total_assets - sheet.total_liabilities_and_equity) < tolerance


class BalanceSheetService:
    """기간 데이터로부터 대차대조표를 구성하는 서비스.

    - 연초~기준일 순이익을 당기순이익(자본)으로 반영
    - 미수 수입/미지급 지출/미지급 급여를 채권·채무로 반영
    - 나머지 항목은 계정코드 표에 따라 수기 잔액에서 합산
    - 부수효과 없음: 같은 입력이면 같은 결과
    """

    def __init__(self, config: ReportConfig, classifier: Optional[AccountClassifier] = None):
        self._config = config
        self._classifier = classifier or AccountClassifier(config.account_table)

    def build_balance_sheet(
        self,
        data: PeriodData,
        period_end: date,
        year_start: date
    ) -> BalanceSheet:
        """대차대조표 생성.

        Args:
            data: 리더가 기간으로 한정해 가져온 데이터
            period_end: 기준일 (월 말일)
            year_start: 회계연도 시작일

        Returns:
            BalanceSheet (불균형이어도 반환)
        """
        bucket = self._bucket_reader(data)

        ytd_profit = (
            sum_amounts(data.received_income)
            - sum_amounts(data.paid_expenses)
            - sum_amounts(data.paid_payroll)
        )

        # 자산
        cash_bank = bucket("cash_bank")
        accounts_receivable = sum_amounts(data.pending_income)
        employee_receivables = bucket("employee_receivables")
        prepaid_expenses = bucket("prepaid_expenses")
        total_current_assets = cash_bank + accounts_receivable + employee_receivables + prepaid_expenses

        office_equipment = bucket("office_equipment")
        vehicles = bucket("vehicles")
        accumulated_depreciation = bucket("accumulated_depreciation")
        total_fixed_assets = office_equipment + vehicles - accumulated_depreciation

        total_assets = total_current_assets + total_fixed_assets

        # 부채
        accounts_payable = sum_amounts(data.pending_expenses)
        salary_payable = sum_amounts(data.pending_payroll)
        tax_payable = bucket("tax_payable")
        bpjs_payable = bucket("bpjs_payable")
        total_current_liabilities = accounts_payable + salary_payable + tax_payable + bpjs_payable

        long_term_liabilities = bucket("long_term_liabilities")
        total_liabilities = total_current_liabilities + long_term_liabilities

        # 자본
        paid_in_capital = bucket("paid_in_capital")
        retained_earnings = bucket("retained_earnings")
        total_equity = paid_in_capital + retained_earnings + ytd_profit

        total_liabilities_and_equity = total_liabilities + total_equity

        self._warn_negative_contra(data)

        sheet = BalanceSheet(
            year=period_end.year,
            month=period_end.month,
            as_of_date=period_end,
            cash_bank=cash_bank,
            accounts_receivable=accounts_receivable,
            employee_receivables=employee_receivables,
            prepaid_expenses=prepaid_expenses,
            total_current_assets=total_current_assets,
            office_equipment=office_equipment,
            vehicles=vehicles,
            accumulated_depreciation=accumulated_depreciation,
            total_fixed_assets=total_fixed_assets,
            total_assets=total_assets,
            accounts_payable=accounts_payable,
            salary_payable=salary_payable,
            tax_payable=tax_payable,
            bpjs_payable=bpjs_payable,
            total_current_liabilities=total_current_liabilities,
            long_term_liabilities=long_term_liabilities,
            total_liabilities=total_liabilities,
            paid_in_capital=paid_in_capital,
            retained_earnings=retained_earnings,
            current_year_profit=ytd_profit,
            total_equity=total_equity,
            total_liabilities_and_equity=total_liabilities_and_equity,
            is_balanced=abs(total_assets - total_liabilities_and_equity) < self._config.tolerance,
        )

        if not sheet.is_balanced:
            logger.warning(
                f"대차 불일치 ({year_start} ~ {period_end}): 자산={total_assets}, "
                f"부채+자본={total_liabilities_and_equity}, 차이={sheet.imbalance}"
            )
        return sheet

    def _bucket_reader(self, data: PeriodData):
        def read(bucket: str) -> Decimal:
            return self._classifier.sum_by_bucket(data.manual_items, data.accounts, bucket)
        return read

    def _warn_negative_contra(self, data: PeriodData) -> None:
        """음수로 입력된 차감 계정은 보정하지 않고 경고만 남긴다."""
        table = self._classifier.account_table
        for item in data.manual_items:
            code = self._classifier.resolve_code(item, data.accounts)
            if code and table.is_contra(code) and item.amount < 0:
                logger.warning(
                    f"차감 계정 {code} 항목이 음수로 입력됨 (id={item.id}, amount={item.amount}): "
                    "이중 차감될 수 있습니다"
                )
