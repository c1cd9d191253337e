"""LedgerReaderService 테스트."""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.errors import DataUnavailable
from core.domain.models.ledger import ExpenseStatus, IncomeStatus
from core.domain.models.reporting_period import ReportingPeriod
from core.services.ledger_reader_service import LedgerReaderService

from conftest import FakeLedgerStore

ROWS = {
    "chart_of_accounts": [{"id": "a1", "code": "1110", "name": "Kas", "is_active": True}],
    "balance_sheet_items": [{"id": "b1", "account_id": "a1", "amount": "1,500", "as_of_date": "2024-06-30"}],
    "income": [{"id": "i1", "amount": 1000, "date": "2024-06-10", "status": "received", "type": "project"}],
    "expenses": [{
        "id": "e1", "amount": "250.50", "category": "project", "sub_category": None,
        "paid_at": "2024-06-15T10:00:00+00:00", "created_at": "2024-06-12T08:00:00+00:00", "status": "paid",
    }],
    "payroll": [{"id": "p1", "amount": "700", "month": "2024-06", "status": "paid"}],
}


def calls_for(store, table):
    return [call for call in store.calls if call[0] == table]


def test_fetch_period_data_parses_rows():
    store = FakeLedgerStore(ROWS)
    data = LedgerReaderService(store).fetch_period_data(date(2024, 6, 30), date(2024, 1, 1))

    assert data.accounts[0].code == "1110"
    assert data.manual_items[0].amount == Decimal("1500")
    assert data.received_income[0].amount == Decimal("1000")
    assert data.paid_expenses[0].paid_at == date(2024, 6, 15)
    assert data.paid_payroll[0].month == "2024-06"
    assert len(store.calls) == 8


def test_fetch_period_data_filters():
    store = FakeLedgerStore()
    LedgerReaderService(store).fetch_period_data(date(2024, 6, 30), date(2024, 1, 1))

    accounts = calls_for(store, "chart_of_accounts")[0]
    assert accounts[1].eq == {"is_active": True}
    assert accounts[2] == "code"

    items = calls_for(store, "balance_sheet_items")[0][1]
    assert items.lte == {"as_of_date": "2024-06-30"}
    assert items.gte == {}

    income_filters = [call[1] for call in calls_for(store, "income")]
    received = next(f for f in income_filters if f.eq["status"] == IncomeStatus.RECEIVED.value)
    pending = next(f for f in income_filters if f.eq["status"] == IncomeStatus.PENDING.value)
    assert received.gte == {"date": "2024-01-01"}
    assert received.lte == {"date": "2024-06-30"}
    assert pending.gte == {}
    assert pending.lte == {"date": "2024-06-30"}

    expense_filters = [call[1] for call in calls_for(store, "expenses")]
    paid = next(f for f in expense_filters if f.eq["status"] == ExpenseStatus.PAID.value)
    unpaid = next(f for f in expense_filters if f.eq["status"] == ExpenseStatus.PENDING.value)
    assert paid.gte == {"paid_at": "2024-01-01"}
    assert unpaid.lte == {"created_at": "2024-06-30"}

    payroll_filters = [call[1] for call in calls_for(store, "payroll")]
    paid_payroll = next(f for f in payroll_filters if f.eq.get("status") == "paid")
    pending_payroll = next(f for f in payroll_filters if f.in_)
    assert paid_payroll.gte == {"month": "2024-01"}
    assert paid_payroll.lte == {"month": "2024-06"}
    assert list(pending_payroll.in_["status"]) == ["draft", "final"]
    assert pending_payroll.lte == {"month": "2024-06"}


def test_store_failure_raises_data_unavailable():
    """조회 하나가 실패하면 부분 결과 없이 전체가 실패한다."""
    store = FakeLedgerStore(ROWS, failing=("payroll",))

    with pytest.raises(DataUnavailable) as exc_info:
        LedgerReaderService(store).fetch_period_data(date(2024, 6, 30), date(2024, 1, 1))

    assert "payroll" in exc_info.value.source


def test_malformed_row_raises_data_unavailable():
    rows = dict(ROWS)
    rows["income"] = [{"id": "i1", "amount": "abc", "date": "2024-06-10", "status": "received"}]

    with pytest.raises(DataUnavailable):
        LedgerReaderService(FakeLedgerStore(rows)).fetch_period_data(date(2024, 6, 30), date(2024, 1, 1))


def test_fetch_month_data_by_paid_at():
    store = FakeLedgerStore(ROWS)
    data = LedgerReaderService(store).fetch_month_data(ReportingPeriod(2024, 6))

    assert len(store.calls) == 5
    expenses = calls_for(store, "expenses")[0][1]
    assert expenses.gte == {"paid_at": "2024-06-01"}
    assert expenses.lte == {"paid_at": "2024-06-30"}

    payroll = calls_for(store, "payroll")[0][1]
    assert payroll.eq == {"status": "paid", "month": "2024-06"}

    items = calls_for(store, "balance_sheet_items")[0]
    assert items[2] == "as_of_date"
    assert items[3] is True

    assert data.paid_expenses[0].amount == Decimal("250.50")


def test_fetch_month_data_by_created_at_covers_whole_last_day():
    store = FakeLedgerStore()
    LedgerReaderService(store).fetch_month_data(ReportingPeriod(2024, 2), expense_date_field="created_at")

    expenses = calls_for(store, "expenses")[0][1]
    assert expenses.gte == {"created_at": "2024-02-01"}
    assert expenses.lte == {"created_at": "2024-02-29T23:59:59"}


def test_fetch_month_data_scoped_to_client_and_project():
    store = FakeLedgerStore()
    LedgerReaderService(store).fetch_month_data(ReportingPeriod(2024, 6), client_id="c1", project_id="p1")

    income = calls_for(store, "income")[0][1]
    expenses = calls_for(store, "expenses")[0][1]
    assert income.eq == {"status": "received", "client_id": "c1", "project_id": "p1"}
    assert expenses.eq["client_id"] == "c1"
    assert "client_id" not in calls_for(store, "payroll")[0][1].eq


def test_fetch_month_data_rejects_unknown_date_field():
    with pytest.raises(ValueError):
        LedgerReaderService(FakeLedgerStore()).fetch_month_data(ReportingPeriod(2024, 6), expense_date_field="date")


def test_row_missing_column_raises_data_unavailable():
    """컬럼이 빠진 행도 KeyError가 아니라 DataUnavailable로 전파된다."""
    store = FakeLedgerStore({"chart_of_accounts": [{"id": "a1", "name": "Kas"}]})

    with pytest.raises(DataUnavailable) as exc_info:
        LedgerReaderService(store).fetch_period_data(date(2024, 6, 30), date(2024, 1, 1))

    assert "chart_of_accounts" in exc_info.value.source


def test_non_mapping_row_raises_data_unavailable():
    store = FakeLedgerStore({"payroll": ["not-a-row"]})

    with pytest.raises(DataUnavailable):
        LedgerReaderService(store).fetch_month_data(ReportingPeriod(2024, 6))


def test_fetch_month_data_without_balance_items():
    store = FakeLedgerStore(ROWS)
    data = LedgerReaderService(store).fetch_month_data(ReportingPeriod(2024, 6), include_balance_items=False)

    assert sorted(call[0] for call in store.calls) == ["expenses", "income", "payroll"]
    assert data.accounts == []
    assert data.manual_items == []


def test_fetch_month_data_embeds_names_for_income_and_expenses():
    store = FakeLedgerStore()
    LedgerReaderService(store).fetch_month_data(ReportingPeriod(2024, 6), embed_names=True)

    selects = {call[0]: call[4] for call in store.calls}
    assert "clients:client_id(id,name)" in selects["income"]
    assert "projects:project_id(id,title)" in selects["expenses"]
    assert selects["payroll"] is None
    assert selects["chart_of_accounts"] is None
