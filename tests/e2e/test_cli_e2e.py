"""CLI E2E 테스트 (외부 API는 가짜 어댑터로 대체)."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pandas as pd
import pytest
from typer.testing import CliRunner

from dart_insight.cli import app
from dart_insight.core.domain.exceptions import DartApiError
from dart_insight.core.domain.models.disclosure import ConsolidationType, LineItem, StatementType
from dart_insight.core.ports.disclosure_port import DisclosurePort
from dart_insight.infra.adapters.gemini_summary_adapter import GeminiSummaryAdapter

runner = CliRunner()


class FakeDisclosureAdapter(DisclosurePort):
    def __init__(self, *args, **kwargs):
        self.calls = []

    def get_line_items(self, corp_code, fiscal_year, report_type):
        self.calls.append((corp_code, fiscal_year, report_type))
        return [
            LineItem(StatementType.BALANCE_SHEET, ConsolidationType.CONSOLIDATED, "자산총계", "1,000", "900"),
            LineItem(StatementType.BALANCE_SHEET, ConsolidationType.CONSOLIDATED, "부채총계", "400", "380"),
            LineItem(StatementType.BALANCE_SHEET, ConsolidationType.CONSOLIDATED, "자본총계", "600", "520"),
            LineItem(StatementType.INCOME_STATEMENT, ConsolidationType.CONSOLIDATED, "매출액", "500", "450"),
            LineItem(StatementType.INCOME_STATEMENT, ConsolidationType.CONSOLIDATED, "당기순이익", "50", "40"),
        ]


@pytest.fixture
def corp_json(tmp_path, monkeypatch):
    path = tmp_path / "corp.json"
    path.write_text(json.dumps([
        {"corp_code": "00126380", "corp_name": "삼성전자", "corp_eng_name": "SAMSUNG ELECTRONICS CO,.LTD",
         "stock_code": "005930", "modify_date": "20230110"},
        {"corp_code": "00126371", "corp_name": "삼성전기", "corp_eng_name": "SAMSUNG ELECTRO-MECHANICS",
         "stock_code": "009150", "modify_date": "20230110"},
    ], ensure_ascii=False), encoding="utf-8")
    monkeypatch.setenv("CORP_DATA_PATH", str(path))
    monkeypatch.setenv("DART_API_KEY", "dummy_key")
    return path


def test_search(corp_json):
    result = runner.invoke(app, ["search", "삼성"])

    assert result.exit_code == 0
    assert "00126380" in result.output
    assert "00126371" in result.output


def test_report_by_name_with_excel_output(corp_json, tmp_path):
    # Arrange
    output = tmp_path / "out" / "report.xlsx"

    # Act
    with patch("dart_insight.cli.DartDisclosureAdapter", FakeDisclosureAdapter):
        result = runner.invoke(app, ["report", "삼성전자", "--year", "2023", "--output", str(output)])

    # Assert
    assert result.exit_code == 0, result.output
    assert "부채비율" in result.output
    assert "66.67%" in result.output
    with pd.ExcelFile(output) as excel_file:
        assert "재무비율" in excel_file.sheet_names


def test_report_unknown_company(corp_json):
    result = runner.invoke(app, ["report", "없는회사", "--year", "2023"])

    assert result.exit_code == 1


def test_report_invalid_year(corp_json):
    with patch("dart_insight.cli.DartDisclosureAdapter", FakeDisclosureAdapter):
        result = runner.invoke(app, ["report", "00126380", "--year", "2014"])

    assert result.exit_code == 1


def test_report_api_error(corp_json):
    class FailingAdapter(FakeDisclosureAdapter):
        def get_line_items(self, corp_code, fiscal_year, report_type):
            raise DartApiError("인증키가 유효하지 않습니다.", status="010")

    with patch("dart_insight.cli.DartDisclosureAdapter", FailingAdapter):
        result = runner.invoke(app, ["report", "00126380", "--year", "2023"])

    assert result.exit_code == 1
    assert "인증키가 유효하지 않습니다." in result.output


def test_convert_corp_from_xml(tmp_path, monkeypatch):
    # Arrange
    xml_path = tmp_path / "CORPCODE.xml"
    xml_path.write_text(
        "<result><list><corp_code>00126380</corp_code><corp_name>삼성전자</corp_name>"
        "<stock_code>005930</stock_code></list></result>",
        encoding="utf-8",
    )
    json_path = tmp_path / "corp.json"
    monkeypatch.setenv("CORP_DATA_PATH", str(json_path))

    # Act
    result = runner.invoke(app, ["convert-corp", "--xml", str(xml_path)])

    # Assert
    assert result.exit_code == 0, result.output
    records = json.loads(json_path.read_text(encoding="utf-8"))
    assert records[0]["corp_name"] == "삼성전자"


def test_report_output_write_failure(corp_json, tmp_path):
    """저장 경로의 상위 경로가 파일이면 메시지를 출력하고 종료 코드 1."""
    # Arrange
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    # Act
    with patch("dart_insight.cli.DartDisclosureAdapter", FakeDisclosureAdapter):
        result = runner.invoke(app, ["report", "00126380", "--year", "2023", "-o", str(blocker / "out.xlsx")])

    # Assert
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "저장 실패" in result.output


def test_analyze_gemini_timeout(corp_json):
    """Gemini 요청 타임아웃은 트레이스백 없이 오류 메시지로 끝난다."""
    # Arrange
    client = MagicMock()
    client.models.generate_content.side_effect = httpx.ReadTimeout("timed out")

    def adapter_with_fake_client(**kwargs):
        return GeminiSummaryAdapter(model=kwargs.get("model", "gemini-2.5-flash"), client=client)

    # Act
    with patch("dart_insight.cli.DartDisclosureAdapter", FakeDisclosureAdapter), \
         patch("dart_insight.cli.GeminiSummaryAdapter", adapter_with_fake_client):
        result = runner.invoke(app, ["analyze", "00126380", "--year", "2023"])

    # Assert
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "분석 실패" in result.output


def test_analyze_prints_summary(corp_json):
    client = MagicMock()
    client.models.generate_content.return_value.text = "재무 상태가 안정적입니다."

    def adapter_with_fake_client(**kwargs):
        return GeminiSummaryAdapter(client=client)

    with patch("dart_insight.cli.DartDisclosureAdapter", FakeDisclosureAdapter), \
         patch("dart_insight.cli.GeminiSummaryAdapter", adapter_with_fake_client):
        result = runner.invoke(app, ["analyze", "00126380", "--year", "2023"])

    assert result.exit_code == 0, result.output
    assert "재무 상태가 안정적입니다." in result.output
