"""DART API 단일회사 주요계정 어댑터."""

import logging
import os
from typing import Dict, List, Optional

import requests

from dart_insight.core.domain.exceptions import ConfigurationError, DartApiError
from dart_insight.core.domain.models.disclosure import LineItem, ReportType, validate_fiscal_year
from dart_insight.core.ports.disclosure_port import DisclosurePort
from dart_insight.infra.adapters.dart_response_parser import DartResponseParser

logger = logging.getLogger(__name__)


class DartDisclosureAdapter(DisclosurePort):
    """DART API를 통한 주요 계정 조회 어댑터.

    - 연결/개별 재무제표 행을 모두 받아오며 선택은 서비스 레이어가 한다
    - 재시도나 캐시는 하지 않는다
    """

    _API_URL = "https://opendart.fss.or.kr/api/fnlttSinglAcnt.json"

    def __init__(self, api_key: Optional[str] = None, timeout: float = 30):
        """초기화.

        Args:
            api_key: DART API 키 (None이면 환경변수에서 읽음)
            timeout: 요청 타임아웃 (초)
        """
        self._api_key = api_key or os.getenv("DART_API_KEY") or os.getenv("OPEN_DART_API_KEY")
        if not self._api_key:
            raise ConfigurationError("DART_API_KEY가 설정되지 않았습니다.")
        self._timeout = timeout

    def get_line_items(
        self,
        corp_code: str,
        fiscal_year: int,
        report_type: ReportType
    ) -> List[LineItem]:
        """주요 계정 조회.

        사업연도는 네트워크 호출 전에 검증한다.
        """
        validate_fiscal_year(fiscal_year)
        params = self._build_api_params(corp_code, fiscal_year, report_type)
        logger.info(f"DART 주요계정 요청: corp_code={corp_code}, year={fiscal_year}, report={report_type.value}")

        try:
            response = requests.get(self._API_URL, params=params, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning(f"DART API 요청 실패: {e}")
            raise DartApiError(f"DART API 요청 실패: {e}") from e
        except ValueError as e:
            logger.warning(f"DART API 응답 파싱 실패: {e}")
            raise DartApiError(f"DART API 응답을 해석할 수 없습니다: {e}") from e

        return DartResponseParser.parse_line_items(data)

    def _build_api_params(
        self,
        corp_code: str,
        fiscal_year: int,
        report_type: ReportType
    ) -> Dict[str, str]:
        return {
            "crtfc_key": self._api_key,
            "corp_code": corp_code,
            "bsns_year": str(fiscal_year),
            "reprt_code": report_type.value,
        }
