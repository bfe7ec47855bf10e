"""공시 재무제표 조회 포트 인터페이스."""

from abc import ABC, abstractmethod
from typing import List

from dart_insight.core.domain.models.disclosure import LineItem, ReportType


class DisclosurePort(ABC):
    """공시 재무제표 조회 포트."""

    @abstractmethod
    def get_line_items(
        self,
        corp_code: str,
        fiscal_year: int,
        report_type: ReportType
    ) -> List[LineItem]:
        """단일 기업의 주요 계정 목록 조회.
        
        Args:
            corp_code: 기업 고유번호
            fiscal_year: 사업연도 (2015 이상)
            report_type: 보고서 타입
        
        Returns:
            계정과목 리스트 (데이터가 없으면 빈 리스트)

        Raises:
            DartApiError: API가 오류 상태를 반환하거나 전송에 실패한 경우
        """
        raise NotImplementedError
