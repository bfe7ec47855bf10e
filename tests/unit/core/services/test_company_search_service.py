"""기업 검색 인덱스 테스트."""

import pytest

from dart_insight.core.domain.models.company import Company
from dart_insight.core.ports.corp_code_port import CorpCodePort
from dart_insight.core.services.company_search_service import CompanyIndex


class FakeCorpCodePort(CorpCodePort):
    def __init__(self, companies):
        self._companies = companies

    def get_companies(self):
        return list(self._companies)


@pytest.fixture
def index():
    return CompanyIndex([
        Company("00126380", "삼성전자", "SAMSUNG ELECTRONICS CO,.LTD", "005930"),
        Company("00164779", "에스케이하이닉스", "SK hynix Inc.", "000660"),
        Company("00126371", "삼성전기", "SAMSUNG ELECTRO-MECHANICS CO., LTD.", "009150"),
        Company("00999999", "삼성전자", "duplicate name", ""),
    ])


def test_search_by_korean_name(index):
    results = index.search("삼성")

    assert [c.corp_code for c in results] == ["00126380", "00126371", "00999999"]


def test_search_english_name_case_insensitive(index):
    assert [c.corp_code for c in index.search("hynix")] == ["00164779"]
    assert [c.corp_code for c in index.search("HYNIX")] == ["00164779"]


def test_search_by_stock_code(index):
    assert [c.corp_name for c in index.search("0059")] == ["삼성전자"]


def test_search_limit(index):
    assert len(index.search("삼성", limit=2)) == 2


@pytest.mark.parametrize("term", ["", "   "])
def test_search_blank_term(index, term):
    assert index.search(term) == []


def test_get_code_exact_name_first_wins(index):
    assert index.get_code("삼성전자") == "00126380"
    assert index.get_code("삼성") is None


def test_get_by_code(index):
    assert index.get("00164779").corp_name == "에스케이하이닉스"
    assert index.get("00000000") is None


def test_from_port():
    port = FakeCorpCodePort([Company("00126380", "삼성전자")])

    index = CompanyIndex.from_port(port)

    assert len(index) == 1
