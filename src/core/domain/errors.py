"""재무 리포트 엔진 예외 정의."""

from typing import Optional


class FinanceReportError(Exception):
    """리포트 엔진에서 발생하는 모든 예외의 기반 클래스."""


class LedgerStoreError(FinanceReportError):
    """외부 저장소(어댑터) 조회 실패."""

    def __init__(self, table: str, message: str):
        super().__init__(f"{table}: {message}")
        self.table = table


class InvalidLedgerRow(FinanceReportError):
    """원장 행을 도메인 모델로 변환할 수 없음."""


class DataUnavailable(FinanceReportError):
    """리포트 산출에 필요한 조회 중 하나라도 실패한 경우.

    부분 집계는 절대 만들지 않으며, 호출자에게 그대로 전파된다.
    """

    def __init__(self, source: str, cause: Optional[BaseException] = None):
        message = f"데이터를 불러올 수 없습니다: {source}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
        self.source = source


class InvalidBalanceItem(FinanceReportError):
    """수기 잔액 항목 입력 검증 실패."""


class AccessDenied(FinanceReportError):
    """요청한 리포트를 볼 권한이 없음."""
