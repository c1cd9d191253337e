"""메인 실행 스크립트 - 이번 달 대차대조표 요약 출력."""

import os
import sys
import logging
from datetime import date
from pathlib import Path
from dotenv import load_dotenv

# src 디렉토리를 모듈 검색 경로에 추가
sys.path.append(str(Path(__file__).parent))

from core.domain.errors import FinanceReportError
from core.domain.models.reporting_period import ReportingPeriod
from core.services.account_classifier import AccountClassifier
from core.services.balance_sheet_service import BalanceSheetService
from core.services.finance_insight_service import FinanceInsightService
from core.services.financial_report_service import FinancialReportService
from core.services.income_statement_service import IncomeStatementService
from core.services.ledger_reader_service import LedgerReaderService
from core.services.report_config import load_report_config
from infra.adapters.local_ledger_adapter import LocalLedgerAdapter
from infra.adapters.supabase_ledger_adapter import SupabaseLedgerAdapter
from report_view import format_rupiah

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def main():
    # .env 파일 로드
    load_dotenv()

    data_dir = os.getenv("LEDGER_DATA_DIR")
    if data_dir:
        store = LocalLedgerAdapter(data_dir)
    elif os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_KEY"):
        store = SupabaseLedgerAdapter()
    else:
        logger.error("SUPABASE_URL/SUPABASE_KEY 또는 LEDGER_DATA_DIR 환경 변수가 설정되지 않았습니다.")
        return

    logger.info("서비스 초기화 중...")
    config = load_report_config(os.getenv("REPORT_CONFIG_PATH"))
    classifier = AccountClassifier(config.account_table)
    service = FinancialReportService(
        reader=LedgerReaderService(store),
        balance_sheet_service=BalanceSheetService(config, classifier),
        insight_service=FinanceInsightService(config, classifier),
        income_statement_service=IncomeStatementService(config),
    )

    period = ReportingPeriod.from_date(date.today())
    roles = os.getenv("REPORT_ROLES", "finance").split(",")

    try:
        sheet = service.balance_sheet(period, roles)
    except FinanceReportError as e:
        logger.exception(f"대차대조표 생성 실패: {e}")
        return

    logger.info(f"기준일 {sheet.as_of_date}")
    logger.info(f"총 자산: {format_rupiah(sheet.total_assets)}")
    logger.info(f"총 부채+자본: {format_rupiah(sheet.total_liabilities_and_equity)}")
    logger.info("균형" if sheet.is_balanced else f"불균형 (차이 {format_rupiah(sheet.imbalance)})")


if __name__ == "__main__":
    main()
