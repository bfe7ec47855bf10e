"""재무비율 계산."""

from typing import Optional, Sequence

from dart_insight.core.domain.models.disclosure import LineItem, PeriodTriple
from dart_insight.core.domain.models.financial_metrics import FinancialRatios, PeriodRatios
from dart_insight.core.services.account_lookup import (
    DEFAULT_SYNONYMS,
    AccountSynonyms,
    has_prior_prior,
    lookup_with_synonyms,
)

CURRENT = "current"
PRIOR = "prior"
PRIOR_PRIOR = "prior_prior"


def safe_divide(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """안전한 나눗셈 (None 또는 분모 0이면 None)."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator


def _percent(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    quotient = safe_divide(numerator, denominator)
    if quotient is None:
        return None
    return quotient * 100


def period_value(triple: Optional[PeriodTriple], period: str) -> Optional[int]:
    """PeriodTriple에서 한 기간의 값을 꺼낸다 (계정이 없으면 None)."""
    if triple is None:
        return None
    return getattr(triple, period)


def compute_ratios(
    balance_sheet_items: Sequence[LineItem],
    income_statement_items: Sequence[LineItem],
    synonyms: Optional[AccountSynonyms] = None
) -> PeriodRatios:
    """재무상태표/손익계산서 계정으로 기간별 재무비율 계산.

    각 기간은 독립적으로 계산한다. 전전기 비율은 공시에 전전기 금액이
    전혀 없으면 None이다 (전전기가 보고되었지만 계정이 없는 경우와 구분).

    Args:
        balance_sheet_items: 연결 재무상태표 계정
        income_statement_items: 연결 손익계산서 계정
        synonyms: 계정명 동의어 (None이면 기본값)

    Returns:
        PeriodRatios
    """
    synonyms = synonyms or DEFAULT_SYNONYMS
    bs, is_ = balance_sheet_items, income_statement_items

    accounts = {
        "assets": lookup_with_synonyms(synonyms.total_assets, bs),
        "liabilities": lookup_with_synonyms(synonyms.total_liabilities, bs),
        "equity": lookup_with_synonyms(synonyms.total_equity, bs),
        "current_assets": lookup_with_synonyms(synonyms.current_assets, bs),
        "current_liabilities": lookup_with_synonyms(synonyms.current_liabilities, bs),
        "revenue": lookup_with_synonyms(synonyms.revenue, is_),
        "operating_income": lookup_with_synonyms(synonyms.operating_income, is_),
        "net_income": lookup_with_synonyms(synonyms.net_income, is_),
    }

    prior_prior = None
    if has_prior_prior(bs) or has_prior_prior(is_):
        prior_prior = _ratios_for_period(accounts, PRIOR_PRIOR)

    return PeriodRatios(
        current=_ratios_for_period(accounts, CURRENT),
        prior=_ratios_for_period(accounts, PRIOR),
        prior_prior=prior_prior,
    )


def _ratios_for_period(accounts: dict, period: str) -> FinancialRatios:
    value = {name: period_value(triple, period) for name, triple in accounts.items()}
    return FinancialRatios(
        debt_ratio=_percent(value["liabilities"], value["equity"]),
        current_ratio=_percent(value["current_assets"], value["current_liabilities"]),
        equity_ratio=_percent(value["equity"], value["assets"]),
        roe=_percent(value["net_income"], value["equity"]),
        roa=_percent(value["net_income"], value["assets"]),
        operating_margin=_percent(value["operating_income"], value["revenue"]),
        net_margin=_percent(value["net_income"], value["revenue"]),
    )
