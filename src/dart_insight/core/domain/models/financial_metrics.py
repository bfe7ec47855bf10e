"""재무비율, 성장률 및 차트 시리즈 모델."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from dart_insight.core.domain.models.disclosure import PeriodTriple


@dataclass(frozen=True)
class FinancialRatios:
    """한 기간의 재무비율 (단위: %).

    ``None`` 은 필요한 계정이 없거나 분모가 0인 경우이며 0으로 바꾸지 않는다.
    """
    debt_ratio: Optional[float] = None        # 부채비율
    current_ratio: Optional[float] = None     # 유동비율
    equity_ratio: Optional[float] = None      # 자기자본비율
    roe: Optional[float] = None
    roa: Optional[float] = None
    operating_margin: Optional[float] = None  # 영업이익률
    net_margin: Optional[float] = None        # 순이익률


@dataclass(frozen=True)
class GrowthRates:
    """한 기간의 전년 대비 성장률 (단위: %)."""
    revenue_growth: Optional[float] = None
    operating_income_growth: Optional[float] = None
    net_income_growth: Optional[float] = None
    asset_growth: Optional[float] = None


@dataclass(frozen=True)
class PeriodRatios:
    """기간별 재무비율.

    Attributes:
        current: 당기
        prior: 전기
        prior_prior: 전전기 (공시에 전전기 금액이 없으면 None)
    """
    current: FinancialRatios
    prior: FinancialRatios
    prior_prior: Optional[FinancialRatios] = None


@dataclass(frozen=True)
class PeriodGrowth:
    """기간별 성장률. ``prior`` 는 전전기 매출액이 있을 때만 채워진다."""
    current: GrowthRates
    prior: Optional[GrowthRates] = None


@dataclass(frozen=True)
class ChartPoint:
    """항목별 비교 차트의 한 점 (x축 = 항목명)."""
    name: str
    current: Optional[float]
    prior: Optional[float]
    prior_prior: Optional[float] = None


@dataclass(frozen=True)
class TrendPoint:
    """기간 추이 차트의 한 점 (x축 = 기간).

    Attributes:
        period: "전전기", "전기", "당기"
        values: {지표명: 값}
    """
    period: str
    values: Dict[str, Optional[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class DisclosureMetrics:
    """한 기업/연도/보고서 조합에서 도출한 지표 묶음."""
    key_metrics: Dict[str, Optional[PeriodTriple]]
    ratios: PeriodRatios
    growth: PeriodGrowth
    revenue_cagr: Optional[float] = None
