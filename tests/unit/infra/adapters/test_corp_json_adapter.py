"""CorpJsonAdapter 테스트."""

import json

import pytest

from dart_insight.core.domain.models.company import Company
from dart_insight.infra.adapters.corp_json_adapter import CorpJsonAdapter


def test_save_and_load(tmp_path):
    # Arrange
    path = tmp_path / "data" / "corp.json"
    adapter = CorpJsonAdapter(path)
    companies = [Company("00126380", "삼성전자", "SAMSUNG ELECTRONICS CO,.LTD", "005930", "20230110")]

    # Act
    adapter.save_companies(companies)

    # Assert
    raw = path.read_text(encoding="utf-8")
    assert "삼성전자" in raw  # ensure_ascii=False
    assert adapter.get_companies() == companies


def test_records_without_code_or_name_are_skipped(tmp_path):
    path = tmp_path / "corp.json"
    path.write_text(json.dumps([
        {"corp_code": "00126380", "corp_name": "삼성전자"},
        {"corp_code": "", "corp_name": "코드없음"},
        {"corp_code": "00000001"},
    ]), encoding="utf-8")

    companies = CorpJsonAdapter(path).get_companies()

    assert companies == [Company("00126380", "삼성전자")]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CorpJsonAdapter(tmp_path / "missing.json").get_companies()
