"""수기 잔액 항목의 계정코드 분류 서비스."""

from decimal import Decimal
from typing import Dict, Iterable, Optional, Sequence

from core.domain.errors import InvalidBalanceItem
from core.domain.models.ledger import ZERO, ChartOfAccount, ManualBalanceItem
from core.services.report_config import AccountCodeTable


class AccountClassifier:
    """수기 잔액 항목을 계정코드/버킷 단위로 합산하는 서비스.

    - account_id → 계정과목 → 코드 해석
    - 일치 항목이 없으면 0 반환 (수기 조정이 없는 것은 정상 상태)
    - account_id가 비었거나 계정표에 없는 항목은 어떤 버킷에도 포함되지 않음
    """

    def __init__(self, account_table: AccountCodeTable):
        self._table = account_table

    @property
    def account_table(self) -> AccountCodeTable:
        return self._table

    def sum_by_account_code(
        self,
        manual_items: Iterable[ManualBalanceItem],
        accounts: Sequence[ChartOfAccount],
        code: str
    ) -> Decimal:
        """단일 계정코드 합계."""
        return self._sum_codes(manual_items, accounts, (code,))

    def sum_by_bucket(
        self,
        manual_items: Iterable[ManualBalanceItem],
        accounts: Sequence[ChartOfAccount],
        bucket: str
    ) -> Decimal:
        """버킷에 매핑된 모든 코드의 합계."""
        return self._sum_codes(manual_items, accounts, self._table.codes_for(bucket))

    def latest_amount(
        self,
        manual_items: Iterable[ManualBalanceItem],
        accounts: Sequence[ChartOfAccount],
        bucket: str
    ) -> Decimal:
        """버킷의 가장 최근(as_of_date) 항목 금액. 없으면 0."""
        codes = set(self._table.codes_for(bucket))
        code_by_id = self._code_by_id(accounts)
        latest: Optional[ManualBalanceItem] = None
        for item in manual_items:
            if code_by_id.get(item.account_id) not in codes:
                continue
            if latest is None or item.as_of_date > latest.as_of_date:
                latest = item
        return latest.amount if latest else ZERO

    def resolve_code(
        self,
        item: ManualBalanceItem,
        accounts: Sequence[ChartOfAccount]
    ) -> Optional[str]:
        return self._code_by_id(accounts).get(item.account_id)

    def validate_balance_item(
        self,
        item: ManualBalanceItem,
        accounts: Sequence[ChartOfAccount]
    ) -> None:
        """수기 잔액 항목 입력 검증.

        차감 계정(감가상각누계액 등)은 양수 크기로만 입력되어야 한다.
        집계 단계에서는 부호를 보정하지 않으므로 입력 시점에 막는다.

        Raises:
            InvalidBalanceItem: 계정을 찾을 수 없거나 차감 계정 금액이 음수인 경우
        """
        code = self.resolve_code(item, accounts)
        if code is None:
            raise InvalidBalanceItem(f"활성 계정을 찾을 수 없습니다: account_id={item.account_id}")
        if self._table.is_contra(code) and item.amount < 0:
            raise InvalidBalanceItem(
                f"차감 계정({code})은 양수 크기로 입력해야 합니다: {item.amount}"
            )

    def _sum_codes(
        self,
        manual_items: Iterable[ManualBalanceItem],
        accounts: Sequence[ChartOfAccount],
        codes: Sequence[str]
    ) -> Decimal:
        if not codes:
            return ZERO
        wanted = set(codes)
        code_by_id = self._code_by_id(accounts)
        return sum(
            (item.amount for item in manual_items if code_by_id.get(item.account_id) in wanted),
            ZERO,
        )

    @staticmethod
    def _code_by_id(accounts: Sequence[ChartOfAccount]) -> Dict[Optional[str], str]:
        return {account.id: account.code for account in accounts}
