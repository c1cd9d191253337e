"""원장 도메인 모델 - 외부 저장소의 행을 그대로 옮긴 불변 스냅샷."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional

from core.domain.errors import InvalidLedgerRow

ZERO = Decimal("0")


class IncomeStatus(Enum):
    """수입 상태."""
    PENDING = "pending"
    RECEIVED = "received"


class ExpenseStatus(Enum):
    """지출 상태."""
    PENDING = "pending"
    PAID = "paid"


class PayrollStatus(Enum):
    """급여 상태."""
    DRAFT = "draft"
    FINAL = "final"
    PAID = "paid"


def parse_amount(value: Any) -> Decimal:
    """금액을 Decimal로 변환.

    JSON 숫자, "1,000" 같은 문자열, 회계식 음수 표기 "(500)"를 모두 받는다.
    빈 값은 0으로 취급한다.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    text = str(value).strip().replace(",", "")
    if not text or text == "-":
        return ZERO
    if text.startswith("(") and text.endswith(")"):
        text = "-" + text[1:-1]
    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidLedgerRow(f"금액 형식이 올바르지 않습니다: {value!r}")


def parse_date(value: Any) -> Optional[date]:
    """ISO 날짜 또는 타임스탬프 문자열에서 날짜만 추출."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise InvalidLedgerRow(f"날짜 형식이 올바르지 않습니다: {value!r}")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "t", "1", "yes")


def _parse_status(enum_type, value: Any):
    try:
        return enum_type(str(value).strip())
    except ValueError:
        raise InvalidLedgerRow(f"{enum_type.__name__}에 없는 상태값: {value!r}")


def _required_date(row: Mapping[str, Any], key: str) -> date:
    parsed = parse_date(row.get(key))
    if parsed is None:
        raise InvalidLedgerRow(f"'{key}' 값이 비어 있습니다: {row.get('id')}")
    return parsed


def _required_text(row: Mapping[str, Any], key: str) -> str:
    text = _optional_text(row.get(key))
    if text is None:
        raise InvalidLedgerRow(f"'{key}' 값이 비어 있습니다: {row.get('id')}")
    return text


def _embedded_text(row: Mapping[str, Any], relation: str, key: str) -> Optional[str]:
    """PostgREST 임베디드 리소스(예: clients.name) 값."""
    value = row.get(relation)
    if isinstance(value, Mapping):
        return _optional_text(value.get(key))
    return None


@dataclass(frozen=True)
class ChartOfAccount:
    """계정과목표 항목."""
    id: str
    code: str
    name: str
    is_active: bool = True

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ChartOfAccount":
        return cls(
            id=_required_text(row, "id"),
            code=_required_text(row, "code"),
            name=str(row.get("name") or ""),
            is_active=_parse_bool(row.get("is_active", True)),
        )


@dataclass(frozen=True)
class ManualBalanceItem:
    """수기 잔액 항목 (고정자산 장부가, 미지급 세금 등).

    감가상각누계액 같은 차감 계정도 양수 크기로 저장된다.
    """
    id: str
    account_id: Optional[str]
    amount: Decimal
    as_of_date: date

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ManualBalanceItem":
        return cls(
            id=str(row.get("id") or ""),
            account_id=_optional_text(row.get("account_id")),
            amount=parse_amount(row.get("amount")),
            as_of_date=_required_date(row, "as_of_date"),
        )


@dataclass(frozen=True)
class IncomeRecord:
    """수입 기록."""
    id: str
    amount: Decimal
    date: date
    status: IncomeStatus
    type: str = "other"
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    project_id: Optional[str] = None
    project_title: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "IncomeRecord":
        return cls(
            id=str(row.get("id") or ""),
            amount=parse_amount(row.get("amount")),
            date=_required_date(row, "date"),
            status=_parse_status(IncomeStatus, row.get("status")),
            type=_optional_text(row.get("type")) or "other",
            client_id=_optional_text(row.get("client_id")),
            client_name=_optional_text(row.get("client_name")) or _embedded_text(row, "clients", "name"),
            project_id=_optional_text(row.get("project_id")),
            project_title=_optional_text(row.get("project_title")) or _embedded_text(row, "projects", "title"),
        )


@dataclass(frozen=True)
class ExpenseRecord:
    """지출 기록. paid_at은 지급 전까지 비어 있을 수 있다."""
    id: str
    amount: Decimal
    category: str
    sub_category: Optional[str]
    paid_at: Optional[date]
    created_at: date
    status: ExpenseStatus
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    project_id: Optional[str] = None
    project_title: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ExpenseRecord":
        return cls(
            id=str(row.get("id") or ""),
            amount=parse_amount(row.get("amount")),
            category=_optional_text(row.get("category")) or "lainnya",
            sub_category=_optional_text(row.get("sub_category")),
            paid_at=parse_date(row.get("paid_at")),
            created_at=_required_date(row, "created_at"),
            status=_parse_status(ExpenseStatus, row.get("status")),
            client_id=_optional_text(row.get("client_id")),
            client_name=_optional_text(row.get("client_name")) or _embedded_text(row, "clients", "name"),
            project_id=_optional_text(row.get("project_id")),
            project_title=_optional_text(row.get("project_title")) or _embedded_text(row, "projects", "title"),
        )


@dataclass(frozen=True)
class PayrollRecord:
    """급여 기록. month는 "YYYY-MM" 문자열."""
    id: str
    amount: Decimal
    month: str
    status: PayrollStatus

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PayrollRecord":
        month = _optional_text(row.get("month"))
        if month is None:
            raise InvalidLedgerRow(f"'month' 값이 비어 있습니다: {row.get('id')}")
        return cls(
            id=str(row.get("id") or ""),
            amount=parse_amount(row.get("amount")),
            month=month[:7],
            status=_parse_status(PayrollStatus, row.get("status")),
        )
