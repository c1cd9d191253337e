"""리포트 기준 기간 모델."""

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ReportingPeriod:
    """(연도, 월) 기준 기간.

    대차대조표는 해당 월 말일 기준(as of), 손익 지표는 해당 월 한 달을 대상으로 한다.
    """
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"월은 1~12 사이여야 합니다: {self.month}")

    @property
    def period_start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def period_end(self) -> date:
        last_day = calendar.monthrange(self.year, self.month)[1]
        return date(self.year, self.month, last_day)

    @property
    def year_start(self) -> date:
        return date(self.year, 1, 1)

    @property
    def month_key(self) -> str:
        """급여 테이블 조회용 "YYYY-MM" 키."""
        return f"{self.year:04d}-{self.month:02d}"

    def previous(self) -> "ReportingPeriod":
        """직전 월."""
        if self.month == 1:
            return ReportingPeriod(self.year - 1, 12)
        return ReportingPeriod(self.year, self.month - 1)

    @classmethod
    def from_date(cls, value: date) -> "ReportingPeriod":
        return cls(value.year, value.month)


def month_key_of(value: date) -> str:
    """날짜를 "YYYY-MM" 키로 변환."""
    return f"{value.year:04d}-{value.month:02d}"
