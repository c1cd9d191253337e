"""로컬 CSV 원장 조회 어댑터."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from core.domain.errors import LedgerStoreError
from core.ports.ledger_store_port import LedgerStorePort, QueryFilter


class LocalLedgerAdapter(LedgerStorePort):
    """디렉터리의 ``<테이블명>.csv`` 파일을 원장으로 사용하는 어댑터.

    - 모든 컬럼을 문자열로 읽고, 날짜/월 비교는 ISO 문자열 비교로 처리
    - 저장소 내보내기(export) 파일로 오프라인 리포트를 만들 때 사용
    """

    def __init__(self, data_dir: Union[str, Path]):
        """초기화.

        Args:
            data_dir: 테이블 CSV 파일이 있는 디렉터리
        """
        self._data_dir = Path(data_dir)

    def query(
        self,
        table: str,
        filters: Optional[QueryFilter] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        select: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        # CSV 내보내기는 이름 컬럼(client_name, project_title)을 평탄하게 담으므로 select는 무시
        df = self._read_table(table)
        filters = filters or QueryFilter()

        mask = pd.Series(True, index=df.index)
        for column, value in filters.eq.items():
            mask &= self._column(df, table, column, value) == self._format_value(value)
        for column, value in filters.gte.items():
            mask &= self._column(df, table, column, value) >= self._format_value(value)
        for column, value in filters.lte.items():
            mask &= self._column(df, table, column, value) <= self._format_value(value)
        for column, values in filters.in_.items():
            formatted = [self._format_value(v) for v in values]
            mask &= self._column(df, table, column, values[0] if values else "").isin(formatted)

        # 비교 대상 값이 비어 있는 행(예: paid_at 미기재)은 범위 조건에서 제외
        for column in list(filters.gte) + list(filters.lte):
            mask &= df[column].str.strip() != ""

        result = df[mask]
        if order_by:
            if order_by not in result.columns:
                raise LedgerStoreError(table, f"정렬 컬럼이 없습니다: {order_by}")
            result = result.sort_values(order_by, ascending=not descending, kind="stable")

        return result.to_dict(orient="records")

    def _read_table(self, table: str) -> pd.DataFrame:
        path = self._data_dir / f"{table}.csv"
        if not path.exists():
            raise LedgerStoreError(table, f"파일을 찾을 수 없습니다: {path}")
        try:
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise LedgerStoreError(table, str(e)) from e

    @staticmethod
    def _column(df: pd.DataFrame, table: str, column: str, value: Any) -> pd.Series:
        if column not in df.columns:
            raise LedgerStoreError(table, f"컬럼이 없습니다: {column}")
        series = df[column].str.strip()
        if isinstance(value, bool):
            return series.str.lower()
        return series

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
