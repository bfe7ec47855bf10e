"""공시 재무제표 도메인 모델."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


MIN_FISCAL_YEAR = 2015


class ReportType(Enum):
    """보고서 타입."""
    ANNUAL = "11011"
    SEMI_ANNUAL = "11012"
    Q1 = "11013"
    Q3 = "11014"

    @property
    def label(self) -> str:
        return _REPORT_LABELS[self]

    @classmethod
    def from_value(cls, value: str) -> "ReportType":
        """보고서 코드("11011") 또는 이름("annual")으로 ReportType을 찾는다."""
        normalized = value.strip().lower()
        for report_type in cls:
            if normalized in (report_type.value, report_type.name.lower(), _REPORT_ALIASES[report_type]):
                return report_type
        raise ValueError(f"지원하지 않는 보고서 타입입니다: {value}")


_REPORT_LABELS = {
    ReportType.ANNUAL: "사업보고서",
    ReportType.SEMI_ANNUAL: "반기보고서",
    ReportType.Q1: "1분기보고서",
    ReportType.Q3: "3분기보고서",
}

_REPORT_ALIASES = {
    ReportType.ANNUAL: "annual",
    ReportType.SEMI_ANNUAL: "semi",
    ReportType.Q1: "q1",
    ReportType.Q3: "q3",
}


class StatementType(Enum):
    """재무제표 종류 (sj_div)."""
    BALANCE_SHEET = "BS"     # 재무상태표
    INCOME_STATEMENT = "IS"  # 손익계산서
    CASH_FLOW = "CF"         # 현금흐름표


class ConsolidationType(Enum):
    """재무제표 구분 (fs_div)."""
    CONSOLIDATED = "CFS"  # 연결
    SEPARATE = "OFS"      # 개별


@dataclass(frozen=True)
class LineItem:
    """공시 재무제표의 계정과목 한 행.

    금액 필드는 API가 준 문자열(천 단위 구분자 포함, 없으면 "-") 그대로 보관한다.
    ``prior_prior_amount`` 는 원본 행에 필드 자체가 없으면 ``None`` 이다.
    """
    statement_type: Optional[StatementType]
    consolidation_type: Optional[ConsolidationType]
    account_name: str
    current_amount: str
    prior_amount: str
    prior_prior_amount: Optional[str] = None

    corp_code: str = ""
    fiscal_year: str = ""
    report_code: str = ""
    current_period_name: str = ""
    prior_period_name: str = ""
    prior_prior_period_name: str = ""
    currency: str = ""
    order: str = ""

    @property
    def is_consolidated(self) -> bool:
        return self.consolidation_type is ConsolidationType.CONSOLIDATED


@dataclass(frozen=True)
class PeriodTriple:
    """한 계정의 당기/전기/전전기 금액."""
    current: int
    prior: int
    prior_prior: Optional[int] = None


def validate_fiscal_year(year: int) -> int:
    """사업연도 검증 (네 자리, 2015년 이상).

    Raises:
        ValueError: 범위를 벗어난 경우
    """
    if not isinstance(year, int) or isinstance(year, bool):
        raise ValueError(f"사업연도는 정수여야 합니다: {year!r}")
    if year < MIN_FISCAL_YEAR or year > 9999:
        raise ValueError(f"사업연도는 {MIN_FISCAL_YEAR}년 이상의 네 자리 연도여야 합니다: {year}")
    return year
