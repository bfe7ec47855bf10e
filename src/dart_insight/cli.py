"""CLI 인터페이스."""

import logging
import re
import sys
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dart_insight.config import AppConfig, load_config
from dart_insight.core.domain.exceptions import DartInsightError
from dart_insight.core.domain.models.disclosure import MIN_FISCAL_YEAR, ReportType
from dart_insight.core.services.amount_normalizer import EMPTY_AMOUNT, format_magnitude, format_percent
from dart_insight.core.services.analysis_service import DisclosureLoad, FinancialAnalysisService
from dart_insight.core.services.company_search_service import CompanyIndex
from dart_insight.core.services.metrics_service import (
    GROWTH_LABELS,
    KEY_METRIC_LABELS,
    RATIO_LABELS,
    MetricsService,
)
from dart_insight.core.services.report_service import ReportExportService
from dart_insight.infra.adapters.corp_code_adapter import CorpCodeAdapter, parse_corp_xml
from dart_insight.infra.adapters.corp_json_adapter import CorpJsonAdapter
from dart_insight.infra.adapters.dart_disclosure_adapter import DartDisclosureAdapter
from dart_insight.infra.adapters.gemini_summary_adapter import GeminiSummaryAdapter
from dart_insight.infra.adapters.local_storage_adapter import LocalStorageAdapter

# Typer 앱 생성
app = typer.Typer(
    name="dart-insight",
    help="DART 공시 재무제표 분석 도구",
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

_CORP_CODE_PATTERN = re.compile(r"^\d{8}$")


def _default_year() -> int:
    return date.today().year - 1


def _fail(message: str) -> None:
    console.print(f"[red]❌ {message}[/red]")
    logger.error(message)
    raise typer.Exit(code=1)


def _load_index(config: AppConfig) -> CompanyIndex:
    return CompanyIndex.from_port(CorpJsonAdapter(config.corp_data_path))


def _resolve_corp_code(corp: str, config: AppConfig) -> str:
    """8자리 고유번호는 그대로, 아니면 기업명(정확히 일치)으로 찾는다."""
    corp = corp.strip()
    if _CORP_CODE_PATTERN.match(corp):
        return corp

    index = _load_index(config)
    code = index.get_code(corp)
    if code:
        return code

    candidates = ", ".join(f"{c.corp_name}({c.corp_code})" for c in index.search(corp, limit=5))
    hint = f" 후보: {candidates}" if candidates else ""
    _fail(f"기업을 찾을 수 없습니다: {corp}.{hint}")


def _build_analysis_service(
    config: AppConfig,
    metrics_service: MetricsService,
    with_summary: bool
) -> FinancialAnalysisService:
    summary_adapter = None
    if with_summary:
        summary_adapter = GeminiSummaryAdapter(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            timeout_seconds=config.gemini_timeout_seconds,
        )
    return FinancialAnalysisService(
        disclosure_port=DartDisclosureAdapter(config.dart_api_key, timeout=config.dart_timeout_seconds),
        summary_port=summary_adapter,
        metrics_service=metrics_service,
    )


def _parse_report_type(report: str) -> ReportType:
    try:
        return ReportType.from_value(report)
    except ValueError as e:
        _fail(str(e))


def _print_disclosure(result: DisclosureLoad) -> None:
    console.print(
        f"[cyan]📋 {result.corp_code} {result.fiscal_year}년 {result.report_type.label} "
        f"({len(result.items)}개 계정)[/cyan]"
    )
    metrics = result.metrics

    table = Table(title="주요 재무 지표")
    for column in ("항목", "당기", "전기", "전전기"):
        table.add_column(column, justify="right" if column != "항목" else "left")
    for key, label in KEY_METRIC_LABELS.items():
        triple = metrics.key_metrics[key]
        if triple is None:
            table.add_row(label, EMPTY_AMOUNT, EMPTY_AMOUNT, EMPTY_AMOUNT)
            continue
        prior_prior = EMPTY_AMOUNT if triple.prior_prior is None else format_magnitude(triple.prior_prior)
        table.add_row(label, format_magnitude(triple.current), format_magnitude(triple.prior), prior_prior)
    console.print(table)

    ratio_table = Table(title="재무비율")
    for column in ("비율", "당기", "전기"):
        ratio_table.add_column(column, justify="right" if column != "비율" else "left")
    for key, label in RATIO_LABELS.items():
        ratio_table.add_row(
            label,
            format_percent(getattr(metrics.ratios.current, key)),
            format_percent(getattr(metrics.ratios.prior, key)),
        )
    console.print(ratio_table)

    growth_table = Table(title="성장률")
    for column in ("항목", "당기", "전기"):
        growth_table.add_column(column, justify="right" if column != "항목" else "left")
    for key, label in GROWTH_LABELS.items():
        prior = metrics.growth.prior
        growth_table.add_row(
            label,
            format_percent(getattr(metrics.growth.current, key)),
            format_percent(getattr(prior, key) if prior else None),
        )
    console.print(growth_table)

    if metrics.revenue_cagr is not None:
        console.print(f"매출액 CAGR (2년): {format_percent(metrics.revenue_cagr)}")


@app.command()
def search(
    term: str = typer.Argument(..., help="기업명, 영문명 또는 종목코드 일부"),
    limit: int = typer.Option(10, "--limit", "-n", help="최대 결과 수"),
):
    """기업을 검색합니다."""
    config = load_config()
    try:
        index = _load_index(config)
    except FileNotFoundError as e:
        _fail(f"{e} (먼저 convert-corp 명령으로 기업 목록을 만드세요)")

    results = index.search(term, limit=limit)
    if not results:
        console.print(f"[yellow]검색 결과가 없습니다: {term}[/yellow]")
        return

    table = Table(title=f"검색 결과: {term}")
    for column in ("고유번호", "기업명", "영문명", "종목코드"):
        table.add_column(column)
    for company in results:
        table.add_row(company.corp_code, company.corp_name, company.corp_eng_name, company.stock_code)
    console.print(table)


@app.command()
def report(
    corp: str = typer.Argument(..., help="고유번호(8자리) 또는 기업명"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=f"사업연도 ({MIN_FISCAL_YEAR} 이상, 기본: 작년)"),
    report_type: str = typer.Option("annual", "--report", "-r", help="보고서 타입 (annual/semi/q1/q3 또는 11011 등)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="차트 시리즈 엑셀 저장 경로"),
):
    """재무 지표를 조회하고 필요하면 엑셀로 저장합니다.

    Examples:
        $ dart-insight report 삼성전자 --year 2023
        $ dart-insight report 00126380 -r q3 -o output/samsung.xlsx
    """
    config = load_config()
    fiscal_year = year or _default_year()
    rtype = _parse_report_type(report_type)

    try:
        corp_code = _resolve_corp_code(corp, config)
        metrics_service = MetricsService(config_path=config.account_synonyms_path)
        service = _build_analysis_service(config, metrics_service, with_summary=False)
        result = service.load(corp_code, fiscal_year, rtype)
    except (DartInsightError, ValueError, FileNotFoundError) as e:
        _fail(f"조회 실패: {e}")

    if not result.items:
        console.print("[yellow]조회된 재무 데이터가 없습니다.[/yellow]")
        return
    _print_disclosure(result)

    if output:
        exporter = ReportExportService(metrics_service, LocalStorageAdapter())
        try:
            exporter.export(result.items, output)
        except OSError as e:
            _fail(f"저장 실패: {e}")
        console.print(f"[green]✅ 저장 완료: {output}[/green]")


@app.command()
def analyze(
    corp: str = typer.Argument(..., help="고유번호(8자리) 또는 기업명"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=f"사업연도 ({MIN_FISCAL_YEAR} 이상, 기본: 작년)"),
    report_type: str = typer.Option("annual", "--report", "-r", help="보고서 타입"),
):
    """Gemini로 재무 데이터를 쉬운 말로 분석합니다."""
    config = load_config()
    fiscal_year = year or _default_year()
    rtype = _parse_report_type(report_type)

    try:
        corp_code = _resolve_corp_code(corp, config)
        metrics_service = MetricsService(config_path=config.account_synonyms_path)
        service = _build_analysis_service(config, metrics_service, with_summary=True)
        result = service.load(corp_code, fiscal_year, rtype)
        _print_disclosure(result)
        console.print("[yellow]🤖 AI 분석 중...[/yellow]")
        text = service.summarize(result.items)
    except (DartInsightError, ValueError, FileNotFoundError) as e:
        _fail(f"분석 실패: {e}")

    console.print(text)


@app.command("convert-corp")
def convert_corp(
    force_download: bool = typer.Option(False, "--force-download", "-f", help="고유번호 파일 재다운로드"),
    xml_path: Optional[Path] = typer.Option(None, "--xml", help="이미 받아둔 CORPCODE.xml 경로"),
):
    """OpenDart 고유번호 XML을 검색용 JSON 파일로 변환합니다."""
    config = load_config()
    try:
        if xml_path:
            companies = parse_corp_xml(xml_path)
        else:
            source = CorpCodeAdapter(
                api_key=config.dart_api_key,
                cache_dir=Path(config.output_directory) / "corp_code",
                force_download=force_download,
                timeout=config.dart_timeout_seconds,
            )
            companies = source.get_companies()
        CorpJsonAdapter(config.corp_data_path).save_companies(companies)
    except (DartInsightError, FileNotFoundError, ET.ParseError) as e:
        _fail(f"변환 실패: {e}")

    console.print(f"[green]✅ {len(companies)}개 기업을 {config.corp_data_path}에 저장했습니다.[/green]")


if __name__ == "__main__":
    app()
