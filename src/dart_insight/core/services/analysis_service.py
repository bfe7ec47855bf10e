"""재무 데이터 조회 및 AI 분석 총괄 서비스."""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from dart_insight.core.domain.models.disclosure import LineItem, PeriodTriple, ReportType, validate_fiscal_year
from dart_insight.core.domain.models.financial_metrics import DisclosureMetrics
from dart_insight.core.ports.disclosure_port import DisclosurePort
from dart_insight.core.ports.summary_port import SummaryPort
from dart_insight.core.services.metrics_service import KEY_METRIC_LABELS, MetricsService

logger = logging.getLogger(__name__)

SUMMARY_PROMPT_TEMPLATE = """다음은 한국 기업의 재무 데이터입니다. 이 데이터를 분석하여 누구나 쉽게 이해할 수 있도록 한국어로 설명해주세요.

주요 재무 지표:
{metrics}

다음 항목들을 포함하여 분석해주세요:
1. 전반적인 재무 상태 평가
2. 주요 재무 지표의 변화 추이 분석
3. 재무 건전성 평가
4. 수익성 분석
5. 간단한 요약 및 종합 의견

분석은 일반인도 이해하기 쉬운 언어로 작성하고, 전문 용어는 최소화해주세요."""


def build_summary_prompt(key_metrics: Dict[str, Optional[PeriodTriple]]) -> str:
    """주요 지표 6종을 JSON으로 직렬화해 분석 프롬프트를 만든다.

    계정이 없는 지표는 null로 들어간다.
    """
    payload = {}
    for key, label in KEY_METRIC_LABELS.items():
        triple = key_metrics.get(key)
        if triple is None:
            payload[label] = None
        else:
            payload[label] = {
                "당기": triple.current,
                "전기": triple.prior,
                "전전기": triple.prior_prior,
            }
    return SUMMARY_PROMPT_TEMPLATE.format(metrics=json.dumps(payload, ensure_ascii=False, indent=2))


@dataclass(frozen=True)
class DisclosureLoad:
    """한 번의 조회 결과 (원본 계정 + 계산된 지표)."""
    corp_code: str
    fiscal_year: int
    report_type: ReportType
    items: List[LineItem]
    metrics: DisclosureMetrics


class FinancialAnalysisService:
    """공시 조회, 지표 계산, AI 요약을 총괄하는 서비스.

    - 기업코드/연도/보고서 타입으로 공시 계정 조회
    - 지표 계산은 MetricsService에 위임
    - 주요 지표 6종으로 프롬프트를 만들어 요약 포트에 전달

    외부 API 오류는 재시도하지 않고 그대로 호출자에게 전파한다.
    """

    def __init__(
        self,
        disclosure_port: DisclosurePort,
        summary_port: Optional[SummaryPort],
        metrics_service: MetricsService
    ):
        self._disclosure_port = disclosure_port
        self._summary_port = summary_port
        self._metrics_service = metrics_service

    def load(self, corp_code: str, fiscal_year: int, report_type: ReportType) -> DisclosureLoad:
        """공시 계정을 조회하고 지표를 계산한다.

        Raises:
            ValueError: 사업연도가 유효하지 않은 경우
            DartApiError: 공시 조회 실패
        """
        validate_fiscal_year(fiscal_year)
        logger.info(f"공시 조회: corp_code={corp_code}, year={fiscal_year}, report={report_type.value}")

        items = self._disclosure_port.get_line_items(corp_code, fiscal_year, report_type)
        if not items:
            logger.warning(f"조회된 계정이 없습니다: corp_code={corp_code}, year={fiscal_year}")

        return DisclosureLoad(
            corp_code=corp_code,
            fiscal_year=fiscal_year,
            report_type=report_type,
            items=list(items),
            metrics=self._metrics_service.analyze(items),
        )

    def summarize(self, items: Sequence[LineItem]) -> str:
        """주요 지표로 AI 분석 텍스트를 생성한다.

        Raises:
            ValueError: 재무 데이터가 비어 있는 경우
            SummaryError: 모델 API 호출 실패
        """
        if not items:
            raise ValueError("재무 데이터가 필요합니다.")
        if self._summary_port is None:
            raise ValueError("AI 요약 어댑터가 설정되지 않았습니다.")

        prompt = build_summary_prompt(self._metrics_service.key_metrics(items))
        logger.info(f"AI 분석 요청 (프롬프트 {len(prompt)}자)")
        return self._summary_port.summarize(prompt)


@dataclass
class AnalysisSession:
    """대화형 화면(기업 선택 후 비동기 조회)의 상태.

    새 조회가 시작되면 이전 조회 결과는 도착하더라도 버린다. 이전 네트워크 호출을
    중단하지는 않는다. 한 번에 한 건만 조회하는 CLI는 사용하지 않으며, 조회가
    겹칠 수 있는 프런트엔드가 FinancialAnalysisService.load 결과를 적용할 때 쓴다.
    """
    corp_code: Optional[str] = None
    load: Optional[DisclosureLoad] = None
    error: Optional[str] = None
    loading: bool = False
    _generation: int = field(default=0, repr=False)

    def select_company(self, corp_code: str) -> None:
        """기업 선택 시 이전 데이터와 오류를 지운다."""
        self.corp_code = corp_code
        self.load = None
        self.error = None
        self._generation += 1
        self.loading = False

    def begin_load(self) -> int:
        """새 조회 시작. 반환된 티켓으로 결과를 적용한다."""
        self._generation += 1
        self.loading = True
        return self._generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self._generation

    def complete_load(self, ticket: int, result: DisclosureLoad) -> bool:
        """조회 결과 적용. 더 최신 조회가 시작되었으면 버리고 False."""
        if not self.is_current(ticket):
            logger.debug(f"이전 조회 결과를 버립니다 (ticket={ticket}, current={self._generation})")
            return False
        self.load = result
        self.error = None
        self.loading = False
        return True

    def fail_load(self, ticket: int, message: str) -> bool:
        """조회 실패 기록. 더 최신 조회가 시작되었으면 무시하고 False."""
        if not self.is_current(ticket):
            return False
        self.load = None
        self.error = message
        self.loading = False
        return True
