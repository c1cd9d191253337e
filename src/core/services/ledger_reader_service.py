"""원장 조회 서비스 (기간 데이터 묶음 생성)."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from core.domain.errors import DataUnavailable, InvalidLedgerRow, LedgerStoreError
from core.domain.models.ledger import (
    ChartOfAccount,
    ExpenseRecord,
    ExpenseStatus,
    IncomeRecord,
    IncomeStatus,
    ManualBalanceItem,
    PayrollRecord,
    PayrollStatus,
)
from core.domain.models.period_data import MonthData, PeriodData
from core.domain.models.reporting_period import ReportingPeriod, month_key_of
from core.ports.ledger_store_port import LedgerStorePort, QueryFilter

logger = logging.getLogger(__name__)

ACCOUNTS_TABLE = "chart_of_accounts"
BALANCE_ITEMS_TABLE = "balance_sheet_items"
INCOME_TABLE = "income"
EXPENSES_TABLE = "expenses"
PAYROLL_TABLE = "payroll"

# 수입/지출에 거래처명, 프로젝트명을 함께 조회 (PostgREST 임베디드 리소스)
NAMED_SELECT = "*,clients:client_id(id,name),projects:project_id(id,title)"


@dataclass(frozen=True)
class _Read:
    """단일 조회 정의."""
    table: str
    parser: Callable[[Dict[str, Any]], Any]
    filters: QueryFilter = field(default_factory=QueryFilter)
    order_by: Optional[str] = None
    descending: bool = False
    select: Optional[str] = None


class LedgerReaderService:
    """원장 저장소에서 리포트용 데이터를 읽어오는 서비스.

    - 서로 의존성이 없는 조회들을 스레드 풀에서 동시에 실행 후 합류
    - 하나라도 실패하면 전체를 DataUnavailable로 실패시킴 (부분 결과 없음)
    - 재시도하지 않음. 타임아웃은 어댑터에 맡김
    """

    def __init__(self, store: LedgerStorePort, max_workers: int = 8):
        self._store = store
        self._max_workers = max_workers

    def fetch_period_data(self, period_end: date, year_start: date) -> PeriodData:
        """대차대조표용 기간 데이터 조회.

        Args:
            period_end: 기준일 (월 말일)
            year_start: 연초

        Returns:
            PeriodData

        Raises:
            DataUnavailable: 조회 중 하나라도 실패한 경우
        """
        end = period_end.isoformat()
        start = year_start.isoformat()
        end_month = month_key_of(period_end)
        start_month = month_key_of(year_start)

        reads = {
            "accounts": self._accounts_read(),
            "manual_items": self._manual_items_read(end),
            "received_income": _Read(
                INCOME_TABLE, IncomeRecord.from_row,
                QueryFilter(
                    eq={"status": IncomeStatus.RECEIVED.value},
                    gte={"date": start},
                    lte={"date": end},
                ),
            ),
            "paid_expenses": _Read(
                EXPENSES_TABLE, ExpenseRecord.from_row,
                QueryFilter(
                    eq={"status": ExpenseStatus.PAID.value},
                    gte={"paid_at": start},
                    lte={"paid_at": end},
                ),
            ),
            "paid_payroll": _Read(
                PAYROLL_TABLE, PayrollRecord.from_row,
                QueryFilter(
                    eq={"status": PayrollStatus.PAID.value},
                    gte={"month": start_month},
                    lte={"month": end_month},
                ),
            ),
            "pending_income": _Read(
                INCOME_TABLE, IncomeRecord.from_row,
                QueryFilter(eq={"status": IncomeStatus.PENDING.value}, lte={"date": end}),
            ),
            "pending_payroll": _Read(
                PAYROLL_TABLE, PayrollRecord.from_row,
                QueryFilter(
                    in_={"status": [PayrollStatus.DRAFT.value, PayrollStatus.FINAL.value]},
                    lte={"month": end_month},
                ),
            ),
            "pending_expenses": _Read(
                EXPENSES_TABLE, ExpenseRecord.from_row,
                QueryFilter(eq={"status": ExpenseStatus.PENDING.value}, lte={"created_at": end}),
            ),
        }

        logger.info(f"기간 데이터 조회: {start} ~ {end}")
        return PeriodData(**self._run(reads))

    def fetch_month_data(
        self,
        period: ReportingPeriod,
        expense_date_field: str = "paid_at",
        client_id: Optional[str] = None,
        project_id: Optional[str] = None,
        include_balance_items: bool = True,
        embed_names: bool = False
    ) -> MonthData:
        """단일 월 손익 데이터 조회.

        Args:
            period: 기준 월
            expense_date_field: 지출 기간 필터 컬럼. 손익계산서는 paid_at이 비어 있을 수 있어 created_at 사용
            client_id: 거래처 한정 (수입/지출)
            project_id: 프로젝트 한정 (수입/지출)
            include_balance_items: 계정과목표와 수기 잔액 항목도 조회할지 여부 (현금 잔액 산출용)
            embed_names: 수입/지출에 거래처명, 프로젝트명을 함께 조회할지 여부 (마진 분석용)
        """
        if expense_date_field not in ("paid_at", "created_at"):
            raise ValueError(f"지원하지 않는 지출 날짜 컬럼: {expense_date_field}")

        start = period.period_start.isoformat()
        end = period.period_end.isoformat()

        scope: Dict[str, Any] = {}
        if client_id:
            scope["client_id"] = client_id
        if project_id:
            scope["project_id"] = project_id

        select = NAMED_SELECT if embed_names else None
        reads = {
            "received_income": _Read(
                INCOME_TABLE, IncomeRecord.from_row,
                QueryFilter(
                    eq={"status": IncomeStatus.RECEIVED.value, **scope},
                    gte={"date": start},
                    lte={"date": end},
                ),
                select=select,
            ),
            "paid_expenses": _Read(
                EXPENSES_TABLE, ExpenseRecord.from_row,
                QueryFilter(
                    eq={"status": ExpenseStatus.PAID.value, **scope},
                    gte={expense_date_field: start},
                    lte={expense_date_field: self._day_end(end, expense_date_field)},
                ),
                select=select,
            ),
            "paid_payroll": _Read(
                PAYROLL_TABLE, PayrollRecord.from_row,
                QueryFilter(eq={"status": PayrollStatus.PAID.value, "month": period.month_key}),
            ),
        }
        if include_balance_items:
            reads["accounts"] = self._accounts_read()
            reads["manual_items"] = self._manual_items_read(end, descending=True)

        logger.info(f"월 데이터 조회: {period.month_key} (지출 기준: {expense_date_field})")
        return MonthData(**self._run(reads))

    @staticmethod
    def _day_end(end: str, column: str) -> str:
        # created_at은 타임스탬프이므로 말일 하루 전체를 포함
        if column == "created_at":
            return f"{end}T23:59:59"
        return end

    @staticmethod
    def _accounts_read() -> _Read:
        return _Read(
            ACCOUNTS_TABLE, ChartOfAccount.from_row,
            QueryFilter(eq={"is_active": True}),
            order_by="code",
        )

    @staticmethod
    def _manual_items_read(end: str, descending: bool = False) -> _Read:
        return _Read(
            BALANCE_ITEMS_TABLE, ManualBalanceItem.from_row,
            QueryFilter(lte={"as_of_date": end}),
            order_by="as_of_date" if descending else None,
            descending=descending,
        )

    def _run(self, reads: Dict[str, _Read]) -> Dict[str, List[Any]]:
        """조회를 동시에 실행하고 모두 성공한 경우에만 결과를 반환."""
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(reads))) as executor:
            futures = {name: executor.submit(self._execute, name, read) for name, read in reads.items()}
            return {name: future.result() for name, future in futures.items()}

    def _execute(self, name: str, read: _Read) -> List[Any]:
        try:
            rows = self._store.query(
                read.table,
                read.filters,
                order_by=read.order_by,
                descending=read.descending,
                select=read.select,
            )
            return [read.parser(row) for row in rows]
        except (LedgerStoreError, InvalidLedgerRow, KeyError, TypeError, AttributeError) as e:
            logger.error(f"{name} ({read.table}) 조회 실패: {e}")
            raise DataUnavailable(f"{name} ({read.table})", e) from e
