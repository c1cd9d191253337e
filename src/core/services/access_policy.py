"""재무 리포트 접근 정책."""

from enum import Enum
from typing import FrozenSet, Iterable, Mapping, Optional

from core.domain.errors import AccessDenied


class Capability(Enum):
    """리포트 조회 권한."""
    VIEW_BALANCE_SHEET = "view_balance_sheet"
    VIEW_INCOME_STATEMENT = "view_income_statement"
    VIEW_INSIGHTS = "view_insights"


DEFAULT_ROLE_CAPABILITIES: Mapping[str, FrozenSet[Capability]] = {
    role: frozenset({
        Capability.VIEW_BALANCE_SHEET,
        Capability.VIEW_INCOME_STATEMENT,
        Capability.VIEW_INSIGHTS,
    })
    for role in ("super_admin", "finance", "accounting")
}


class AccessPolicy:
    """역할 목록을 권한 집합으로 변환하는 정책.

    화면마다 역할 문자열을 비교하는 대신, 데이터 조회 전에 이 정책을 확인한다.
    """

    def __init__(self, role_capabilities: Optional[Mapping[str, FrozenSet[Capability]]] = None):
        self._role_capabilities = role_capabilities or DEFAULT_ROLE_CAPABILITIES

    def capabilities(self, roles: Iterable[str]) -> FrozenSet[Capability]:
        granted = set()
        for role in roles:
            granted |= self._role_capabilities.get(role.strip(), frozenset())
        return frozenset(granted)

    def require(self, roles: Iterable[str], capability: Capability) -> None:
        """권한이 없으면 AccessDenied.

        Raises:
            AccessDenied: 역할 중 어느 것도 권한을 갖지 않은 경우
        """
        roles = list(roles)
        if capability not in self.capabilities(roles):
            raise AccessDenied(f"권한 없음: {capability.value} (roles={roles})")
