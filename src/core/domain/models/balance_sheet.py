"""대차대조표 모델 (파생 값, 저장하지 않음)."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """(연도, 월) 기준 대차대조표 스냅샷.

    조회 파라미터가 바뀔 때마다 새로 생성되며, 생성 후 변경하지 않는다.
    차변/대변이 맞지 않아도 is_balanced=False로 그대로 반환된다.
    """
    year: int
    month: int
    as_of_date: date

    # 유동자산
    cash_bank: Decimal
    accounts_receivable: Decimal
    employee_receivables: Decimal
    prepaid_expenses: Decimal
    total_current_assets: Decimal

    # 고정자산
    office_equipment: Decimal
    vehicles: Decimal
    accumulated_depreciation: Decimal  # 양수 크기, 합계에서 차감됨
    total_fixed_assets: Decimal

    total_assets: Decimal

    # 유동부채
    accounts_payable: Decimal
    salary_payable: Decimal
    tax_payable: Decimal
    bpjs_payable: Decimal
    total_current_liabilities: Decimal

    long_term_liabilities: Decimal
    total_liabilities: Decimal

    # 자본
    paid_in_capital: Decimal
    retained_earnings: Decimal
    current_year_profit: Decimal
    total_equity: Decimal

    total_liabilities_and_equity: Decimal
    is_balanced: bool

    @property
    def imbalance(self) -> Decimal:
        """자산 - (부채 + 자본). 균형이면 0."""
        return self.total_assets - self.total_liabilities_and_equity
