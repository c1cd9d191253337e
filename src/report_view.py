"""리포트 콘솔 출력 (rich) 및 표시용 포맷."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from rich.table import Table

from core.domain.models.balance_sheet import BalanceSheet
from core.domain.models.financial_insights import FinancialInsights, IncomeStatement, MarginItem
from core.services.report_config import ReportConfig

MONTH_NAMES_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


def format_rupiah(amount: Decimal) -> str:
    """Rupiah 표시 (소수점 없음, 천 단위 마침표). 반올림은 표시 단계에서만."""
    rounded = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    text = f"{abs(rounded):,}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}Rp {text}"


def format_percentage(value: Decimal, decimals: int = 1) -> str:
    return f"{Decimal(value):.{decimals}f}%"


def format_runway(months: Optional[Decimal]) -> str:
    """현금 소진 개월 수. 정의되지 않으면 무한대."""
    if months is None:
        return "∞"
    return f"{months:.1f} bulan"


def month_name_id(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES_ID[month - 1]
    return ""


def balance_sheet_tables(sheet: BalanceSheet, config: ReportConfig) -> Dict[str, Table]:
    """대차대조표를 자산 / 부채·자본 두 개의 표로 구성."""
    as_of = f"Per {sheet.as_of_date.day:02d} {month_name_id(sheet.month)} {sheet.year}"

    assets = _statement_table(f"ASET ({as_of})")
    _section(assets, "ASET LANCAR")
    for key in ("cash_bank", "accounts_receivable", "employee_receivables", "prepaid_expenses"):
        _line(assets, config.label(key), getattr(sheet, key), indent=1)
    _line(assets, config.label("total_current_assets"), sheet.total_current_assets, bold=True)
    _section(assets, "ASET TETAP")
    _line(assets, config.label("office_equipment"), sheet.office_equipment, indent=1)
    _line(assets, config.label("vehicles"), sheet.vehicles, indent=1)
    _line(assets, config.label("accumulated_depreciation"), -sheet.accumulated_depreciation, indent=1)
    _line(assets, config.label("total_fixed_assets"), sheet.total_fixed_assets, bold=True)
    _line(assets, config.label("total_assets"), sheet.total_assets, bold=True)

    liabilities = _statement_table(f"KEWAJIBAN & MODAL ({as_of})")
    _section(liabilities, "KEWAJIBAN LANCAR")
    for key in ("accounts_payable", "salary_payable", "tax_payable", "bpjs_payable"):
        _line(liabilities, config.label(key), getattr(sheet, key), indent=1)
    _line(liabilities, config.label("total_current_liabilities"), sheet.total_current_liabilities, bold=True)
    _line(liabilities, config.label("long_term_liabilities"), sheet.long_term_liabilities, indent=1)
    _line(liabilities, config.label("total_liabilities"), sheet.total_liabilities, bold=True)
    _section(liabilities, "MODAL")
    for key in ("paid_in_capital", "retained_earnings", "current_year_profit"):
        _line(liabilities, config.label(key), getattr(sheet, key), indent=1)
    _line(liabilities, config.label("total_equity"), sheet.total_equity, bold=True)
    _line(liabilities, config.label("total_liabilities_and_equity"), sheet.total_liabilities_and_equity, bold=True)

    return {"assets": assets, "liabilities": liabilities}


def balance_status(sheet: BalanceSheet) -> str:
    if sheet.is_balanced:
        return "[green]Balance[/green]"
    return f"[red]Tidak Balance (selisih {format_rupiah(sheet.imbalance)})[/red]"


def insights_table(insights: FinancialInsights) -> Table:
    table = Table(title=f"Insight Keuangan {month_name_id(insights.month)} {insights.year}")
    table.add_column("Indikator")
    table.add_column("Nilai", justify="right")
    table.add_row("Total Pendapatan", format_rupiah(insights.total_revenue))
    table.add_row("Total Pengeluaran", format_rupiah(insights.total_expenses))
    table.add_row("Total Gaji", format_rupiah(insights.total_payroll))
    table.add_row("Total HPP", format_rupiah(insights.total_hpp))
    table.add_row("Rasio HPP", format_percentage(insights.cost_ratio))
    table.add_row("Rasio SDM", format_percentage(insights.payroll_ratio))
    table.add_row("Operating Margin", format_percentage(insights.operating_margin))
    table.add_row("Saldo Kas", format_rupiah(insights.cash_balance))
    table.add_row("Cash Runway", format_runway(insights.cash_runway_months))
    return table


def margin_table(title: str, items: List[MarginItem]) -> Table:
    table = Table(title=title)
    table.add_column("Nama")
    table.add_column("Pendapatan", justify="right")
    table.add_column("Biaya", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Margin", justify="right")
    for item in items:
        table.add_row(
            item.name,
            format_rupiah(item.revenue),
            format_rupiah(item.cost),
            format_rupiah(item.profit),
            format_percentage(item.margin),
        )
    return table


def income_statement_table(
    statement: IncomeStatement,
    changes: Optional[Dict[str, Decimal]] = None
) -> Table:
    table = Table(title=f"Laporan Laba Rugi {month_name_id(statement.month)} {statement.year}")
    table.add_column("Keterangan")
    table.add_column("Jumlah", justify="right")
    if changes is not None:
        table.add_column("vs Bulan Lalu", justify="right")

    rows = [
        ("Pendapatan Utama", "main_revenue"),
        ("Pendapatan Lain-lain", "other_revenue"),
        ("TOTAL PENDAPATAN", "total_revenue"),
        ("Harga Pokok Penjualan (HPP)", "hpp_expenses"),
        ("LABA KOTOR", "gross_profit"),
        ("Beban SDM", "sdm_expenses"),
        ("Beban Marketing", "marketing_expenses"),
        ("Beban IT & Tools", "it_expenses"),
        ("Beban Administrasi", "admin_expenses"),
        ("Beban Lain-lain", "other_expenses"),
        ("TOTAL BEBAN OPERASIONAL", "total_operating_expenses"),
        ("LABA OPERASIONAL", "operating_profit"),
        ("LABA BERSIH", "net_profit"),
    ]
    for label, field_name in rows:
        cells = [label, format_rupiah(getattr(statement, field_name))]
        if changes is not None:
            change = changes.get(field_name)
            cells.append(format_percentage(change) if change is not None else "")
        table.add_row(*cells)

    table.add_section()
    for label, value in (
        ("Gross Margin", statement.gross_margin),
        ("Operating Margin", statement.operating_margin),
        ("Net Margin", statement.net_margin),
    ):
        cells = [label, format_percentage(value)]
        if changes is not None:
            cells.append("")
        table.add_row(*cells)
    return table


def _statement_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Keterangan")
    table.add_column("Jumlah", justify="right")
    return table


def _section(table: Table, label: str) -> None:
    table.add_row(f"[bold]{label}[/bold]", "")


def _line(table: Table, label: str, amount: Decimal, indent: int = 0, bold: bool = False) -> None:
    text = "  " * indent + label
    value = format_rupiah(amount)
    if bold:
        text, value = f"[bold]{text}[/bold]", f"[bold]{value}[/bold]"
    table.add_row(text, value)
