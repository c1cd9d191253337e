"""리포트 설정 (계정코드 표, HPP 규칙, 지출 그룹) 로더."""

import logging
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

# Python 3.11+ 사용 시 tomllib, 이하 버전은 tomli 사용
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        raise ImportError("Python 3.10 이하에서는 'tomli' 패키지가 필요합니다. pip install tomli")

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "report_config.toml"

DEFAULT_ACCOUNT_CODES: Dict[str, Tuple[str, ...]] = {
    "cash_bank": ("1110",),
    "employee_receivables": ("1130",),
    "prepaid_expenses": ("1140",),
    "office_equipment": ("1210",),
    "vehicles": ("1220",),
    "accumulated_depreciation": ("1230",),
    "tax_payable": ("2130",),
    "bpjs_payable": ("2140",),
    "long_term_liabilities": ("2200",),
    "paid_in_capital": ("3100",),
    "retained_earnings": ("3200",),
}

DEFAULT_CONTRA_CODES = ("1230",)

DEFAULT_HPP_CATEGORIES = ("project",)
DEFAULT_HPP_SUB_CATEGORIES = (
    "honor_talent",
    "produksi_konten",
    "vendor_project",
    "transport_project",
    "konsumsi_project",
    "sewa_lokasi",
    "equipment",
)

DEFAULT_EXPENSE_GROUPS: Dict[str, str] = {
    "sdm_hr": "sdm",
    "payroll": "sdm",
    "marketing_growth": "marketing",
    "it_tools": "it",
    "administrasi_legal": "administrasi",
    "operasional": "administrasi",
    "finance": "administrasi",
    "reimburse": "other",
    "lainnya": "other",
}

DEFAULT_MAIN_INCOME_TYPES = ("retainer", "project", "event")

DEFAULT_LABELS: Dict[str, str] = {
    "cash_bank": "Kas & Bank",
    "accounts_receivable": "Piutang Usaha",
    "employee_receivables": "Piutang Karyawan",
    "prepaid_expenses": "Uang Muka",
    "total_current_assets": "Total Aset Lancar",
    "office_equipment": "Peralatan Kantor",
    "vehicles": "Kendaraan",
    "accumulated_depreciation": "Akumulasi Penyusutan",
    "total_fixed_assets": "Total Aset Tetap",
    "total_assets": "TOTAL ASET",
    "accounts_payable": "Hutang Usaha",
    "salary_payable": "Hutang Gaji",
    "tax_payable": "Hutang Pajak",
    "bpjs_payable": "Hutang BPJS",
    "total_current_liabilities": "Total Kewajiban Lancar",
    "long_term_liabilities": "Kewajiban Jangka Panjang",
    "total_liabilities": "TOTAL KEWAJIBAN",
    "paid_in_capital": "Modal Disetor",
    "retained_earnings": "Laba Ditahan",
    "current_year_profit": "Laba Tahun Berjalan",
    "total_equity": "TOTAL MODAL",
    "total_liabilities_and_equity": "TOTAL KEWAJIBAN & MODAL",
}


@dataclass(frozen=True)
class AccountCodeTable:
    """버킷 → 계정코드 매핑.

    한 버킷에 여러 코드를 둘 수 있으므로, 새 코드 추가는 설정 변경만으로 끝난다.
    """
    bucket_codes: Mapping[str, Tuple[str, ...]]
    contra_codes: FrozenSet[str] = frozenset(DEFAULT_CONTRA_CODES)

    def codes_for(self, bucket: str) -> Tuple[str, ...]:
        """버킷에 매핑된 코드. 알 수 없는 버킷은 빈 튜플."""
        return tuple(self.bucket_codes.get(bucket, ()))

    def is_contra(self, code: str) -> bool:
        return code in self.contra_codes


@dataclass(frozen=True)
class HppRule:
    """매출원가(HPP) 지출 판별 규칙."""
    categories: FrozenSet[str] = frozenset(DEFAULT_HPP_CATEGORIES)
    sub_categories: FrozenSet[str] = frozenset(DEFAULT_HPP_SUB_CATEGORIES)

    def matches(self, category: str, sub_category: Optional[str] = None) -> bool:
        if category in self.categories:
            return True
        return bool(sub_category) and sub_category in self.sub_categories


@dataclass(frozen=True)
class ReportConfig:
    """리포트 엔진에 주입되는 정적 설정."""
    account_table: AccountCodeTable = field(
        default_factory=lambda: AccountCodeTable(dict(DEFAULT_ACCOUNT_CODES))
    )
    hpp_rule: HppRule = field(default_factory=HppRule)
    expense_groups: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_EXPENSE_GROUPS))
    main_income_types: FrozenSet[str] = frozenset(DEFAULT_MAIN_INCOME_TYPES)
    tolerance: Decimal = Decimal("0.01")
    labels: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))

    def expense_group(self, category: str, sub_category: Optional[str] = None) -> str:
        """지출을 손익계산서 그룹으로 분류. HPP가 우선한다."""
        if self.hpp_rule.matches(category, sub_category):
            return "hpp"
        return self.expense_groups.get(category, "other")

    def label(self, key: str) -> str:
        return self.labels.get(key, key)


def _as_codes(value: Union[str, int, List]) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return (str(value),)


def load_report_config(config_path: Optional[Union[str, Path]] = None) -> ReportConfig:
    """TOML 설정 파일을 읽어 ReportConfig 생성.

    Args:
        config_path: 설정 파일 경로. None이면 기본 경로 사용: config/report_config.toml

    Returns:
        설정 파일이 없으면 기본값으로 채운 ReportConfig
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info(f"설정 파일이 없어 기본값을 사용합니다: {path}")
        return ReportConfig()

    with open(path, "rb") as f:
        config = tomllib.load(f)

    balance = config.get("balance_sheet", {})
    account_codes = dict(DEFAULT_ACCOUNT_CODES)
    for bucket, codes in balance.get("accounts", {}).items():
        account_codes[bucket] = _as_codes(codes)
    contra_codes = frozenset(_as_codes(balance.get("contra_codes", list(DEFAULT_CONTRA_CODES))))

    hpp = config.get("hpp", {})
    hpp_rule = HppRule(
        categories=frozenset(hpp.get("categories", DEFAULT_HPP_CATEGORIES)),
        sub_categories=frozenset(hpp.get("sub_categories", DEFAULT_HPP_SUB_CATEGORIES)),
    )

    expense_groups = dict(DEFAULT_EXPENSE_GROUPS)
    expense_groups.update(config.get("expense_groups", {}))

    labels = dict(DEFAULT_LABELS)
    labels.update(config.get("labels", {}))

    income = config.get("income", {})

    return ReportConfig(
        account_table=AccountCodeTable(account_codes, contra_codes),
        hpp_rule=hpp_rule,
        expense_groups=expense_groups,
        main_income_types=frozenset(income.get("main_types", DEFAULT_MAIN_INCOME_TYPES)),
        tolerance=Decimal(str(balance.get("tolerance", "0.01"))),
        labels=labels,
    )
