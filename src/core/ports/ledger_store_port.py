"""원장 저장소 조회 포트 인터페이스."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class QueryFilter:
    """테이블 조회 조건.

    Attributes:
        eq: {컬럼: 값} 일치 조건
        gte: {컬럼: 값} 이상 조건
        lte: {컬럼: 값} 이하 조건
        in_: {컬럼: 값 목록} 포함 조건
    """
    eq: Dict[str, Any] = field(default_factory=dict)
    gte: Dict[str, Any] = field(default_factory=dict)
    lte: Dict[str, Any] = field(default_factory=dict)
    in_: Dict[str, Sequence[Any]] = field(default_factory=dict)


class LedgerStorePort(ABC):
    """원장 저장소 조회 포트.

    서비스 레이어는 이 인터페이스에만 의존한다. 구현체는 조회 실패 시
    ``LedgerStoreError``를 발생시켜야 한다. 쓰기 연산은 제공하지 않는다.
    """

    @abstractmethod
    def query(
        self,
        table: str,
        filters: Optional[QueryFilter] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        select: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """테이블 행 조회.

        Args:
            table: 테이블명
            filters: 조회 조건 (None이면 전체)
            order_by: 정렬 컬럼
            descending: 내림차순 여부
            select: 조회 컬럼 (PostgREST select 문법, None이면 전체 컬럼)

        Returns:
            {컬럼: 값} 딕셔너리 리스트
        """
        raise NotImplementedError
