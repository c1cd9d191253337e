"""CLI 인터페이스."""

import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

# src 디렉토리를 모듈 검색 경로에 추가
sys.path.append(str(Path(__file__).parent))

from core.domain.errors import FinanceReportError
from core.domain.models.reporting_period import ReportingPeriod
from core.ports.ledger_store_port import LedgerStorePort
from core.services.access_policy import AccessPolicy
from core.services.account_classifier import AccountClassifier
from core.services.balance_sheet_service import BalanceSheetService
from core.services.finance_insight_service import FinanceInsightService
from core.services.financial_report_service import FinancialReportService
from core.services.income_statement_service import IncomeStatementService
from core.services.ledger_reader_service import LedgerReaderService
from core.services.report_config import ReportConfig, load_report_config
from infra.adapters.local_ledger_adapter import LocalLedgerAdapter
from infra.adapters.supabase_ledger_adapter import SupabaseLedgerAdapter
import report_view

# Typer 앱 생성
app = typer.Typer(
    name="finance-report",
    help="에이전시 재무 리포트 (대차대조표, 손익계산서, 인사이트)",
    add_completion=False
)

# Rich console
console = Console()

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "supabase"
DEFAULT_ROLES = "finance"


def _current_period(year: Optional[int], month: Optional[int]) -> ReportingPeriod:
    today = date.today()
    return ReportingPeriod(year or today.year, month or today.month)


def _parse_roles(roles: Optional[str]) -> List[str]:
    raw = roles or os.getenv("REPORT_ROLES", DEFAULT_ROLES)
    return [r.strip() for r in raw.split(",") if r.strip()]


def _build_store(source: str, data_dir: Optional[str]) -> LedgerStorePort:
    if source == "local":
        directory = data_dir or os.getenv("LEDGER_DATA_DIR", "data/ledger")
        return LocalLedgerAdapter(directory)
    if source == "supabase":
        return SupabaseLedgerAdapter()
    raise typer.BadParameter(f"지원하지 않는 데이터 소스: {source} (supabase | local)")


def _build_service(store: LedgerStorePort, config: ReportConfig) -> FinancialReportService:
    classifier = AccountClassifier(config.account_table)
    return FinancialReportService(
        reader=LedgerReaderService(store),
        balance_sheet_service=BalanceSheetService(config, classifier),
        insight_service=FinanceInsightService(config, classifier),
        income_statement_service=IncomeStatementService(config),
        access_policy=AccessPolicy(),
    )


def _setup(source: str, data_dir: Optional[str], config_path: Optional[str]):
    # .env 파일 로드
    load_dotenv()
    config = load_report_config(config_path or os.getenv("REPORT_CONFIG_PATH"))
    try:
        store = _build_store(source, data_dir)
    except EnvironmentError as e:
        console.print(f"[red]❌ {e}[/red]")
        logger.error(str(e))
        raise typer.Exit(code=1)
    return _build_service(store, config), config


def _fail(e: Exception) -> None:
    console.print(f"[red]❌ 오류 발생: {e}[/red]")
    logger.error(f"리포트 생성 실패: {e}")
    raise typer.Exit(code=1)


@app.command("balance-sheet")
def balance_sheet(
    year: Optional[int] = typer.Option(None, "--year", "-y", help="기준 연도 (기본: 올해)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", min=1, max=12, help="기준 월 (기본: 이번 달)"),
    source: str = typer.Option(DEFAULT_SOURCE, "--source", help="데이터 소스 (supabase | local)"),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="local 소스의 CSV 디렉터리"),
    config_path: Optional[str] = typer.Option(None, "--config", help="리포트 설정 TOML 경로"),
    roles: Optional[str] = typer.Option(None, "--roles", help="사용자 역할 (쉼표로 구분)"),
):
    """월 말일 기준 대차대조표를 출력합니다.

    Examples:
        $ finance-report balance-sheet --year 2024 --month 6
        $ finance-report balance-sheet -y 2024 -m 6 --source local --data-dir data/ledger
    """
    service, config = _setup(source, data_dir, config_path)
    period = _current_period(year, month)
    console.print(f"[yellow]📅 기준일: {period.period_end}[/yellow]")

    try:
        sheet = service.balance_sheet(period, _parse_roles(roles))
    except FinanceReportError as e:
        _fail(e)

    tables = report_view.balance_sheet_tables(sheet, config)
    console.print(tables["assets"])
    console.print(tables["liabilities"])
    console.print(report_view.balance_status(sheet))


@app.command()
def insights(
    year: Optional[int] = typer.Option(None, "--year", "-y", help="기준 연도 (기본: 올해)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", min=1, max=12, help="기준 월 (기본: 이번 달)"),
    source: str = typer.Option(DEFAULT_SOURCE, "--source", help="데이터 소스 (supabase | local)"),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="local 소스의 CSV 디렉터리"),
    config_path: Optional[str] = typer.Option(None, "--config", help="리포트 설정 TOML 경로"),
    roles: Optional[str] = typer.Option(None, "--roles", help="사용자 역할 (쉼표로 구분)"),
    cash_from_balance_sheet: bool = typer.Option(
        False, "--cash-from-balance-sheet", help="현금 잔액을 대차대조표의 Kas & Bank로 사용"
    ),
):
    """월간 재무 인사이트 (HPP/SDM 비율, 영업이익률, cash runway, 마진)를 출력합니다."""
    service, _ = _setup(source, data_dir, config_path)
    period = _current_period(year, month)
    role_list = _parse_roles(roles)

    try:
        cash_balance = None
        if cash_from_balance_sheet:
            cash_balance = service.balance_sheet(period, role_list).cash_bank
        result = service.insights(period, role_list, cash_balance=cash_balance)
    except FinanceReportError as e:
        _fail(e)

    console.print(report_view.insights_table(result))
    if result.client_margins:
        console.print(report_view.margin_table("Margin per Klien", result.client_margins))
    if result.project_margins:
        console.print(report_view.margin_table("Margin per Project", result.project_margins))


@app.command("income-statement")
def income_statement(
    year: Optional[int] = typer.Option(None, "--year", "-y", help="기준 연도 (기본: 올해)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", min=1, max=12, help="기준 월 (기본: 이번 달)"),
    source: str = typer.Option(DEFAULT_SOURCE, "--source", help="데이터 소스 (supabase | local)"),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="local 소스의 CSV 디렉터리"),
    config_path: Optional[str] = typer.Option(None, "--config", help="리포트 설정 TOML 경로"),
    roles: Optional[str] = typer.Option(None, "--roles", help="사용자 역할 (쉼표로 구분)"),
    compare: bool = typer.Option(False, "--compare", help="전월 대비 비교"),
    client: Optional[str] = typer.Option(None, "--client", help="거래처 ID로 한정"),
    project: Optional[str] = typer.Option(None, "--project", help="프로젝트 ID로 한정"),
):
    """월간 손익계산서를 출력합니다."""
    service, _ = _setup(source, data_dir, config_path)
    period = _current_period(year, month)

    try:
        report = service.income_statement(
            period,
            _parse_roles(roles),
            compare=compare,
            client_id=client,
            project_id=project,
        )
    except FinanceReportError as e:
        _fail(e)

    console.print(report_view.income_statement_table(report.current, report.changes))


if __name__ == "__main__":
    app()
