"""Supabase(PostgREST) 원장 조회 어댑터."""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import requests

from core.domain.errors import LedgerStoreError
from core.ports.ledger_store_port import LedgerStorePort, QueryFilter

logger = logging.getLogger(__name__)


class SupabaseLedgerAdapter(LedgerStorePort):
    """PostgREST REST API를 통한 원장 조회 어댑터.

    - 조회 조건을 PostgREST 쿼리 문자열(eq., gte., lte., in.())로 변환
    - HTTP/JSON 오류는 LedgerStoreError로 변환
    - 읽기 전용
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: int = 30
    ):
        """초기화.

        Args:
            url: 프로젝트 URL (None이면 환경변수 SUPABASE_URL)
            api_key: API 키 (None이면 환경변수 SUPABASE_KEY)
            timeout: 요청 타임아웃(초)
        """
        self._url = (url or os.getenv("SUPABASE_URL") or "").rstrip("/")
        self._api_key = api_key or os.getenv("SUPABASE_KEY")
        if not self._url or not self._api_key:
            raise EnvironmentError("SUPABASE_URL / SUPABASE_KEY가 설정되지 않았습니다.")
        self._timeout = timeout

    def query(
        self,
        table: str,
        filters: Optional[QueryFilter] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        select: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        params = self._build_params(filters or QueryFilter(), order_by, descending, select)

        try:
            response = requests.get(
                f"{self._url}/rest/v1/{table}",
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, json.JSONDecodeError) as e:
            raise LedgerStoreError(table, str(e)) from e

        if not isinstance(data, list):
            raise LedgerStoreError(table, f"예상하지 못한 응답 형식: {type(data).__name__}")

        logger.debug(f"{table} 조회: {len(data)}건")
        return data

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    @classmethod
    def _build_params(
        cls,
        filters: QueryFilter,
        order_by: Optional[str],
        descending: bool,
        select: Optional[str] = None
    ) -> List[tuple]:
        """PostgREST 쿼리 파라미터 생성.

        같은 컬럼에 gte와 lte가 함께 올 수 있으므로 튜플 리스트로 만든다.
        """
        params: List[tuple] = [("select", select or "*")]
        for column, value in filters.eq.items():
            params.append((column, f"eq.{cls._format_value(value)}"))
        for column, value in filters.gte.items():
            params.append((column, f"gte.{cls._format_value(value)}"))
        for column, value in filters.lte.items():
            params.append((column, f"lte.{cls._format_value(value)}"))
        for column, values in filters.in_.items():
            params.append((column, f"in.({cls._format_list(values)})"))
        if order_by:
            params.append(("order", f"{order_by}.{'desc' if descending else 'asc'}"))
        return params

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    @classmethod
    def _format_list(cls, values: Sequence[Any]) -> str:
        return ",".join(cls._format_value(v) for v in values)
