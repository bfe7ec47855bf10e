"""기업 검색 인덱스."""

import logging
from typing import Iterable, List, Optional

from dart_insight.core.domain.models.company import Company
from dart_insight.core.ports.corp_code_port import CorpCodePort

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10


class CompanyIndex:
    """읽기 전용 기업 검색 인덱스.

    프로세스 시작 시 한 번 만들고 이후에는 변경하지 않는다 (갱신 경로 없음).
    """

    def __init__(self, companies: Iterable[Company]):
        self._companies = tuple(companies)
        self._by_code = {c.corp_code: c for c in self._companies}
        self._by_name = {}
        for company in self._companies:
            # 같은 이름이 여러 개면 처음 것을 사용
            self._by_name.setdefault(company.corp_name, company)

    @classmethod
    def from_port(cls, port: CorpCodePort) -> "CompanyIndex":
        """포트에서 기업 목록을 읽어 인덱스를 만든다."""
        companies = port.get_companies()
        logger.info(f"기업 검색 인덱스 생성: {len(companies)}개 기업")
        return cls(companies)

    def __len__(self) -> int:
        return len(self._companies)

    def search(self, term: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Company]:
        """기업명, 영문명(대소문자 무시) 또는 종목코드에 검색어가 포함된 기업.

        Args:
            term: 검색어 (공백뿐이면 결과 없음)
            limit: 최대 결과 수

        Returns:
            원래 순서를 유지한 최대 ``limit`` 개의 기업
        """
        if not term or not term.strip() or limit <= 0:
            return []
        needle = term.lower()
        results = []
        for company in self._companies:
            if (
                needle in company.corp_name.lower()
                or needle in company.corp_eng_name.lower()
                or needle in company.stock_code
            ):
                results.append(company)
                if len(results) >= limit:
                    break
        return results

    def get(self, corp_code: str) -> Optional[Company]:
        """고유번호로 기업 조회."""
        return self._by_code.get(corp_code)

    def get_code(self, company_name: str) -> Optional[str]:
        """기업명(정확히 일치)으로 고유번호 조회."""
        company = self._by_name.get(company_name)
        return company.corp_code if company else None
