"""DartResponseParser 테스트."""

import pytest

from dart_insight.core.domain.exceptions import DartApiError
from dart_insight.infra.adapters.dart_response_parser import DartResponseParser


def test_missing_prior_prior_field_is_none():
    """분기/반기 보고서처럼 전전기 필드가 없는 행."""
    data = {
        "status": "000",
        "list": [{
            "sj_div": "IS", "fs_div": "OFS", "account_nm": "매출액",
            "thstrm_amount": "100", "frmtrm_amount": "90",
        }],
    }

    item = DartResponseParser.parse_line_items(data)[0]

    assert item.prior_prior_amount is None
    assert not item.is_consolidated


def test_empty_prior_prior_field_is_kept():
    data = {"status": "000", "list": [{"sj_div": "BS", "fs_div": "CFS", "account_nm": "자산총계",
                                        "thstrm_amount": "1", "frmtrm_amount": "1", "bfefrmtrm_amount": ""}]}

    assert DartResponseParser.parse_line_items(data)[0].prior_prior_amount == ""


def test_unknown_statement_code_is_none():
    data = {"status": "000", "list": [{"sj_div": "SCE", "fs_div": "CFS", "account_nm": "자본금"}]}

    assert DartResponseParser.parse_line_items(data)[0].statement_type is None


def test_status_without_list():
    assert DartResponseParser.parse_line_items({"status": "000"}) == []


def test_error_status_without_message():
    with pytest.raises(DartApiError) as exc_info:
        DartResponseParser.parse_line_items({"status": "010"})

    assert exc_info.value.status == "010"
