"""원장 조회 결과 묶음."""

from dataclasses import dataclass, field
from typing import List

from core.domain.models.ledger import (
    ChartOfAccount,
    ExpenseRecord,
    IncomeRecord,
    ManualBalanceItem,
    PayrollRecord,
)


@dataclass(frozen=True)
class PeriodData:
    """대차대조표 산출에 필요한 기간 데이터.

    Attributes:
        manual_items: 기준일 이전 수기 잔액 항목
        received_income: 연초~기준일 입금 완료 수입
        paid_expenses: 연초~기준일 지급 완료 지출
        paid_payroll: 연초~기준월 지급 완료 급여
        pending_income: 기준일까지 미수 수입 (매출채권)
        pending_payroll: 기준월까지 미지급 급여 (draft, final)
        pending_expenses: 기준일까지 미지급 지출 (매입채무)
        accounts: 활성 계정과목표
    """
    manual_items: List[ManualBalanceItem] = field(default_factory=list)
    received_income: List[IncomeRecord] = field(default_factory=list)
    paid_expenses: List[ExpenseRecord] = field(default_factory=list)
    paid_payroll: List[PayrollRecord] = field(default_factory=list)
    pending_income: List[IncomeRecord] = field(default_factory=list)
    pending_payroll: List[PayrollRecord] = field(default_factory=list)
    pending_expenses: List[ExpenseRecord] = field(default_factory=list)
    accounts: List[ChartOfAccount] = field(default_factory=list)


@dataclass(frozen=True)
class MonthData:
    """단일 월 손익 데이터 (인사이트, 손익계산서용)."""
    received_income: List[IncomeRecord] = field(default_factory=list)
    paid_expenses: List[ExpenseRecord] = field(default_factory=list)
    paid_payroll: List[PayrollRecord] = field(default_factory=list)
    manual_items: List[ManualBalanceItem] = field(default_factory=list)
    accounts: List[ChartOfAccount] = field(default_factory=list)
