"""공용 테스트 픽스처."""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from core.domain.errors import LedgerStoreError
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
from core.ports.ledger_store_port import LedgerStorePort, QueryFilter
from core.services.report_config import ReportConfig

ACCOUNT_CODES = ["1110", "1130", "1140", "1210", "1220", "1230", "2130", "2140", "2200", "3100", "3200"]


class FakeLedgerStore(LedgerStorePort):
    """테이블별 고정 응답을 돌려주고 호출을 기록하는 테스트용 저장소."""

    def __init__(self, rows: Optional[Dict[str, List[Dict[str, Any]]]] = None, failing: tuple = ()):
        self.rows = rows or {}
        self.failing = set(failing)
        self.calls: List[tuple] = []

    def query(self, table, filters=None, order_by=None, descending=False, select=None):
        self.calls.append((table, filters or QueryFilter(), order_by, descending, select))
        if table in self.failing:
            raise LedgerStoreError(table, "connection reset")
        return list(self.rows.get(table, []))


def make_accounts() -> List[ChartOfAccount]:
    return [ChartOfAccount(id=f"acc-{code}", code=code, name=code) for code in ACCOUNT_CODES]


def item(code: Optional[str], amount: str, as_of: date = date(2024, 6, 1), item_id: str = "") -> ManualBalanceItem:
    return ManualBalanceItem(
        id=item_id or f"item-{code}-{amount}",
        account_id=f"acc-{code}" if code else None,
        amount=Decimal(amount),
        as_of_date=as_of,
    )


def income(
    amount: str,
    status: IncomeStatus = IncomeStatus.RECEIVED,
    when: date = date(2024, 6, 10),
    type: str = "project",
    client_id: Optional[str] = None,
    project_id: Optional[str] = None,
    client_name: Optional[str] = None,
) -> IncomeRecord:
    return IncomeRecord(
        id=f"inc-{amount}",
        amount=Decimal(amount),
        date=when,
        status=status,
        type=type,
        client_id=client_id,
        client_name=client_name,
        project_id=project_id,
    )


def expense(
    amount: str,
    category: str = "operasional",
    sub_category: Optional[str] = None,
    status: ExpenseStatus = ExpenseStatus.PAID,
    client_id: Optional[str] = None,
    project_id: Optional[str] = None,
) -> ExpenseRecord:
    return ExpenseRecord(
        id=f"exp-{amount}",
        amount=Decimal(amount),
        category=category,
        sub_category=sub_category,
        paid_at=date(2024, 6, 15) if status == ExpenseStatus.PAID else None,
        created_at=date(2024, 6, 12),
        status=status,
        client_id=client_id,
        project_id=project_id,
    )


def payroll(amount: str, status: PayrollStatus = PayrollStatus.PAID, month: str = "2024-06") -> PayrollRecord:
    return PayrollRecord(id=f"pay-{amount}", amount=Decimal(amount), month=month, status=status)


@pytest.fixture
def config():
    return ReportConfig()


@pytest.fixture
def accounts():
    return make_accounts()


LEDGER_CSV = {
    "chart_of_accounts": "id,code,name,is_active\n" + "".join(
        f"acc-{code},{code},Akun {code},true\n" for code in ACCOUNT_CODES
    ),
    "balance_sheet_items": (
        "id,account_id,amount,as_of_date\n"
        "b1,acc-1110,10300000,2024-06-30\n"
        "b2,acc-1210,5000000,2024-01-01\n"
        "b3,acc-1230,1000000,2024-06-30\n"
        "b4,acc-2130,500000,2024-06-30\n"
        "b5,acc-3100,10000000,2024-01-01\n"
        "b6,acc-1110,99999,2024-07-15\n"
    ),
    "income": (
        "id,amount,date,status,type,client_id,client_name,project_id,project_title\n"
        "i1,3000000,2024-03-10,received,project,c1,Alpha,p1,Launch\n"
        "i2,1000000,2024-06-05,received,retainer,c2,Beta,,\n"
        "i3,2000000,2024-06-20,pending,project,c1,Alpha,,\n"
        "i4,500000,2024-07-02,received,project,c1,Alpha,,\n"
    ),
    "expenses": (
        "id,amount,category,sub_category,paid_at,created_at,status,client_id,client_name,project_id,project_title\n"
        "e1,600000,project,vendor_project,2024-06-10,2024-06-08T10:00:00,paid,c2,Beta,,\n"
        "e2,400000,operasional,atk,2024-02-01,2024-01-30T10:00:00,paid,,,,\n"
        "e3,3000000,marketing_growth,ads,,2024-06-25T10:00:00,pending,,,,\n"
    ),
    "payroll": (
        "id,amount,month,status\n"
        "p1,500000,2024-05,paid\n"
        "p2,300000,2024-06,draft\n"
    ),
}


def write_ledger_csv(directory) -> None:
    """로컬 어댑터용 원장 CSV 작성 (2024년 6월 기준 균형 시나리오)."""
    for table, content in LEDGER_CSV.items():
        (directory / f"{table}.csv").write_text(content, encoding="utf-8")


@pytest.fixture
def ledger_dir(tmp_path):
    write_ledger_csv(tmp_path)
    return tmp_path
