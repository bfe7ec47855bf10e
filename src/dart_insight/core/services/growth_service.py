"""성장률 및 연평균성장률(CAGR) 계산."""

from typing import Optional, Sequence

from dart_insight.core.domain.models.disclosure import LineItem, PeriodTriple
from dart_insight.core.domain.models.financial_metrics import GrowthRates, PeriodGrowth
from dart_insight.core.services.account_lookup import (
    DEFAULT_SYNONYMS,
    AccountSynonyms,
    lookup_with_synonyms,
)
from dart_insight.core.services.ratio_service import CURRENT, PRIOR, PRIOR_PRIOR, period_value


def growth_rate(current: Optional[float], previous: Optional[float]) -> Optional[float]:
    """전기 대비 성장률 (%). 값이 없거나 전기가 0이면 None."""
    if current is None or previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


def compute_growth(
    balance_sheet_items: Sequence[LineItem],
    income_statement_items: Sequence[LineItem],
    synonyms: Optional[AccountSynonyms] = None
) -> PeriodGrowth:
    """매출액, 영업이익, 당기순이익, 자산총계의 전년 대비 성장률 계산.

    당기 성장률은 당기 vs 전기, 전기 성장률은 전기 vs 전전기이다.
    전기 성장률은 매출액의 전전기 금액이 있을 때만 계산한다.
    """
    synonyms = synonyms or DEFAULT_SYNONYMS

    revenue = lookup_with_synonyms(synonyms.revenue, income_statement_items)
    operating_income = lookup_with_synonyms(synonyms.operating_income, income_statement_items)
    net_income = lookup_with_synonyms(synonyms.net_income, income_statement_items)
    total_assets = lookup_with_synonyms(synonyms.total_assets, balance_sheet_items)

    def rates(period: str, base_period: str) -> GrowthRates:
        return GrowthRates(
            revenue_growth=_triple_growth(revenue, period, base_period),
            operating_income_growth=_triple_growth(operating_income, period, base_period),
            net_income_growth=_triple_growth(net_income, period, base_period),
            asset_growth=_triple_growth(total_assets, period, base_period),
        )

    prior = None
    if period_value(revenue, PRIOR_PRIOR) is not None:
        prior = rates(PRIOR, PRIOR_PRIOR)

    return PeriodGrowth(current=rates(CURRENT, PRIOR), prior=prior)


def _triple_growth(triple: Optional[PeriodTriple], period: str, base_period: str) -> Optional[float]:
    return growth_rate(period_value(triple, period), period_value(triple, base_period))


def compute_cagr(start: Optional[float], end: Optional[float], years: float) -> Optional[float]:
    """연평균성장률 (%).

    ``((end / start) ** (1 / years) - 1) * 100``

    시작값이 없거나 0, 종료값이 없음, 기간이 0 이하, 양수에서 음수로 부호가
    바뀐 경우, 또는 end/start가 0 이하인 경우 None을 반환한다.
    """
    if start is None or end is None or start == 0 or years <= 0:
        return None
    if start > 0 and end < 0:
        return None
    ratio = end / start
    if ratio <= 0:
        return None
    return (ratio ** (1 / years) - 1) * 100
