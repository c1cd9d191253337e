"""원장 도메인 모델 및 기준 기간 테스트."""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.errors import InvalidLedgerRow
from core.domain.models.ledger import (
    ChartOfAccount,
    ExpenseRecord,
    ExpenseStatus,
    IncomeRecord,
    IncomeStatus,
    ManualBalanceItem,
    PayrollRecord,
    PayrollStatus,
    parse_amount,
    parse_date,
)
from core.domain.models.reporting_period import ReportingPeriod, month_key_of


@pytest.mark.parametrize("value, expected", [
    (1500, Decimal("1500")),
    ("1,250,000", Decimal("1250000")),
    ("(500)", Decimal("-500")),
    ("12.345", Decimal("12.345")),
    ("", Decimal("0")),
    ("-", Decimal("0")),
    (None, Decimal("0")),
])
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_parse_amount_rejects_text():
    with pytest.raises(InvalidLedgerRow):
        parse_amount("sepuluh ribu")


def test_parse_date():
    assert parse_date("2024-06-15T10:30:00+00:00") == date(2024, 6, 15)
    assert parse_date("") is None
    with pytest.raises(InvalidLedgerRow):
        parse_date("15/06/2024")


def test_chart_of_account_from_row():
    account = ChartOfAccount.from_row({"id": 7, "code": " 1110 ", "name": "Kas", "is_active": "false"})

    assert account.id == "7"
    assert account.code == "1110"
    assert account.is_active is False


def test_manual_balance_item_without_account():
    balance_item = ManualBalanceItem.from_row({"id": "b1", "account_id": "", "amount": "10", "as_of_date": "2024-06-30"})

    assert balance_item.account_id is None
    assert balance_item.amount == Decimal("10")


def test_income_from_row_defaults_type():
    record = IncomeRecord.from_row({"id": "i1", "amount": "100", "date": "2024-06-01", "status": "pending"})

    assert record.status == IncomeStatus.PENDING
    assert record.type == "other"
    assert record.client_id is None


def test_expense_from_row_allows_missing_paid_at():
    record = ExpenseRecord.from_row({
        "id": "e1", "amount": "100", "category": "it_tools", "sub_category": "",
        "paid_at": None, "created_at": "2024-06-02T08:00:00", "status": "pending",
    })

    assert record.paid_at is None
    assert record.created_at == date(2024, 6, 2)
    assert record.sub_category is None
    assert record.status == ExpenseStatus.PENDING


def test_unknown_status_is_rejected():
    with pytest.raises(InvalidLedgerRow):
        IncomeRecord.from_row({"id": "i1", "amount": "1", "date": "2024-06-01", "status": "cancelled"})


def test_payroll_from_row():
    record = PayrollRecord.from_row({"id": "p1", "amount": "5000000", "month": "2024-06-01", "status": "final"})

    assert record.month == "2024-06"
    assert record.status == PayrollStatus.FINAL

    with pytest.raises(InvalidLedgerRow):
        PayrollRecord.from_row({"id": "p2", "amount": "1", "month": "", "status": "paid"})


def test_reporting_period():
    period = ReportingPeriod(2024, 2)

    assert period.period_start == date(2024, 2, 1)
    assert period.period_end == date(2024, 2, 29)
    assert period.year_start == date(2024, 1, 1)
    assert period.month_key == "2024-02"
    assert ReportingPeriod(2024, 1).previous() == ReportingPeriod(2023, 12)
    assert ReportingPeriod.from_date(date(2024, 12, 31)) == ReportingPeriod(2024, 12)
    assert month_key_of(date(2024, 9, 3)) == "2024-09"


def test_reporting_period_rejects_invalid_month():
    with pytest.raises(ValueError):
        ReportingPeriod(2024, 13)


def test_embedded_client_and_project_names():
    row = {
        "id": "i1", "amount": "100", "date": "2024-06-01", "status": "received",
        "client_id": "c1", "clients": {"id": "c1", "name": "Alpha"},
        "project_id": "p1", "projects": {"id": "p1", "title": "Launch"},
    }

    record = IncomeRecord.from_row(row)

    assert record.client_name == "Alpha"
    assert record.project_title == "Launch"

    expense_row = {
        "id": "e1", "amount": "5", "category": "project", "created_at": "2024-06-02",
        "status": "paid", "clients": None, "projects": {"title": "Launch"},
    }
    expense_record = ExpenseRecord.from_row(expense_row)
    assert expense_record.client_name is None
    assert expense_record.project_title == "Launch"


def test_chart_of_account_requires_code():
    with pytest.raises(InvalidLedgerRow):
        ChartOfAccount.from_row({"id": "a1", "name": "Kas"})
