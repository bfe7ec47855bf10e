"""DART API 응답 파싱 유틸리티."""

import logging
from typing import Any, Dict, List, Optional

from dart_insight.core.domain.exceptions import DartApiError
from dart_insight.core.domain.models.disclosure import (
    ConsolidationType,
    LineItem,
    StatementType,
)

logger = logging.getLogger(__name__)

STATUS_OK = "000"
STATUS_NO_DATA = "013"


class DartResponseParser:
    """DART API 응답을 도메인 모델로 변환하는 파서.

    ``fnlttSinglAcnt.json`` 응답의 ``list`` 항목을 LineItem으로 변환합니다.
    """

    @staticmethod
    def parse_line_items(response_data: Dict[str, Any]) -> List[LineItem]:
        """API 응답을 LineItem 리스트로 변환.

        Args:
            response_data: DART API 응답 데이터

        Returns:
            계정과목 리스트 (조회된 데이터가 없으면 빈 리스트)

        Raises:
            DartApiError: 정상/데이터 없음 이외의 상태 코드
        """
        status = response_data.get("status")
        message = response_data.get("message", "")

        if status == STATUS_NO_DATA:
            logger.info(f"조회된 데이터가 없습니다 (status={status}, message={message})")
            return []
        if status != STATUS_OK:
            logger.error(f"API Error - Status: {status}, Message: {message}")
            raise DartApiError(message or f"DART API 오류 (status={status})", status=status)

        return [DartResponseParser._parse_item(item) for item in response_data.get("list", [])]

    @staticmethod
    def _parse_item(item: Dict[str, Any]) -> LineItem:
        """단일 계정 행 변환. 전전기 필드가 없으면 None으로 보관한다."""
        return LineItem(
            statement_type=DartResponseParser._enum_or_none(StatementType, item.get("sj_div")),
            consolidation_type=DartResponseParser._enum_or_none(ConsolidationType, item.get("fs_div")),
            account_name=item.get("account_nm", ""),
            current_amount=item.get("thstrm_amount", ""),
            prior_amount=item.get("frmtrm_amount", ""),
            prior_prior_amount=item.get("bfefrmtrm_amount"),
            corp_code=item.get("corp_code", ""),
            fiscal_year=item.get("bsns_year", ""),
            report_code=item.get("reprt_code", ""),
            current_period_name=item.get("thstrm_nm", ""),
            prior_period_name=item.get("frmtrm_nm", ""),
            prior_prior_period_name=item.get("bfefrmtrm_nm", ""),
            currency=item.get("currency", ""),
            order=item.get("ord", ""),
        )

    @staticmethod
    def _enum_or_none(enum_cls, value: Optional[str]):
        try:
            return enum_cls(value)
        except ValueError:
            return None
