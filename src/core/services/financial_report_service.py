"""재무 리포트 총괄 서비스."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional

from core.domain.models.balance_sheet import BalanceSheet
from core.domain.models.financial_insights import FinancialInsights, IncomeStatement
from core.domain.models.reporting_period import ReportingPeriod
from core.services.access_policy import AccessPolicy, Capability
from core.services.balance_sheet_service import BalanceSheetService
from core.services.finance_insight_service import FinanceInsightService
from core.services.income_statement_service import IncomeStatementService
from core.services.ledger_reader_service import LedgerReaderService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomeStatementReport:
    """손익계산서와 (선택) 전월 비교 결과."""
    current: IncomeStatement
    previous: Optional[IncomeStatement] = None
    changes: Optional[Dict[str, Decimal]] = None


class FinancialReportService:
    """재무 리포트 생성을 총괄하는 서비스.

    - 접근 정책 확인 (조회 전)
    - 원장 조회 → 집계
    - DataUnavailable은 잡지 않고 호출자에게 전파
    """

    def __init__(
        self,
        reader: LedgerReaderService,
        balance_sheet_service: BalanceSheetService,
        insight_service: FinanceInsightService,
        income_statement_service: IncomeStatementService,
        access_policy: Optional[AccessPolicy] = None
    ):
        self._reader = reader
        self._balance_sheet_service = balance_sheet_service
        self._insight_service = insight_service
        self._income_statement_service = income_statement_service
        self._access_policy = access_policy or AccessPolicy()

    def balance_sheet(self, period: ReportingPeriod, roles: Iterable[str]) -> BalanceSheet:
        """기준 월 말일 기준 대차대조표."""
        self._access_policy.require(roles, Capability.VIEW_BALANCE_SHEET)

        logger.info(f"대차대조표 생성: {period.month_key}")
        data = self._reader.fetch_period_data(period.period_end, period.year_start)
        sheet = self._balance_sheet_service.build_balance_sheet(data, period.period_end, period.year_start)
        logger.info(f"대차대조표 완료: 자산={sheet.total_assets}, 균형={sheet.is_balanced}")
        return sheet

    def insights(
        self,
        period: ReportingPeriod,
        roles: Iterable[str],
        cash_balance: Optional[Decimal] = None
    ) -> FinancialInsights:
        """기준 월 인사이트. cash_balance가 없으면 최근 현금 수기 항목 사용."""
        self._access_policy.require(roles, Capability.VIEW_INSIGHTS)

        data = self._reader.fetch_month_data(
            period,
            expense_date_field="paid_at",
            include_balance_items=cash_balance is None,
            embed_names=True,
        )
        return self._insight_service.build_insights(data, period, cash_balance=cash_balance)

    def income_statement(
        self,
        period: ReportingPeriod,
        roles: Iterable[str],
        compare: bool = False,
        client_id: Optional[str] = None,
        project_id: Optional[str] = None
    ) -> IncomeStatementReport:
        """기준 월 손익계산서 (선택적으로 전월 비교)."""
        self._access_policy.require(roles, Capability.VIEW_INCOME_STATEMENT)

        current = self._build_statement(period, client_id, project_id)
        if not compare:
            return IncomeStatementReport(current=current)

        previous = self._build_statement(period.previous(), client_id, project_id)
        return IncomeStatementReport(
            current=current,
            previous=previous,
            changes=self._income_statement_service.compare(current, previous),
        )

    def _build_statement(
        self,
        period: ReportingPeriod,
        client_id: Optional[str],
        project_id: Optional[str]
    ) -> IncomeStatement:
        data = self._reader.fetch_month_data(
            period,
            expense_date_field="created_at",
            client_id=client_id,
            project_id=project_id,
            include_balance_items=False,
        )
        return self._income_statement_service.build_income_statement(data, period)
