"""재무 지표 파사드 서비스."""

from typing import Dict, List, Optional, Sequence, Tuple

from dart_insight.core.domain.models.disclosure import LineItem, PeriodTriple, StatementType
from dart_insight.core.domain.models.financial_metrics import ChartPoint, DisclosureMetrics, TrendPoint
from dart_insight.core.services.account_lookup import AccountSynonyms, load_account_synonyms, lookup_with_synonyms
from dart_insight.core.services.growth_service import compute_cagr, compute_growth
from dart_insight.core.services.ratio_service import CURRENT, PRIOR, PRIOR_PRIOR, compute_ratios, period_value

# 요약용 주요 지표 (순서 고정)
KEY_METRIC_LABELS = {
    "total_assets": "자산총계",
    "total_liabilities": "부채총계",
    "total_equity": "자본총계",
    "revenue": "매출액",
    "operating_income": "영업이익",
    "net_income": "당기순이익",
}

RATIO_LABELS = {
    "debt_ratio": "부채비율",
    "current_ratio": "유동비율",
    "equity_ratio": "자기자본비율",
    "roe": "ROE",
    "roa": "ROA",
    "operating_margin": "영업이익률",
    "net_margin": "순이익률",
}

GROWTH_LABELS = {
    "revenue_growth": "매출성장률",
    "operating_income_growth": "영업이익성장률",
    "net_income_growth": "순이익성장률",
    "asset_growth": "자산성장률",
}

PERIOD_LABELS = {
    PRIOR_PRIOR: "전전기",
    PRIOR: "전기",
    CURRENT: "당기",
}

# 추이 차트는 과거 → 현재 순서
_TREND_PERIODS = (PRIOR_PRIOR, PRIOR, CURRENT)

# 매출액 CAGR 계산 구간 (전전기 → 당기)
_CAGR_YEARS = 2


class MetricsService:
    """공시 계정 목록에서 요약용 주요 지표와 차트 시리즈를 만드는 서비스.

    - 연결 재무상태표/손익계산서/현금흐름표 분리
    - 주요 계정 6종의 기간별 금액
    - 재무비율/성장률 계산 위임 및 차트 시리즈 생성

    계정이 없어도 예외를 던지지 않는다. 해당 값은 None이며 표시 쪽에서 대체 문자를 쓴다.
    """

    def __init__(self, synonyms: Optional[AccountSynonyms] = None, config_path: Optional[str] = None):
        """초기화.

        Args:
            synonyms: 계정명 동의어. 주어지면 config_path는 무시한다.
            config_path: 동의어 설정 파일 경로 (TOML 형식).
                        None이면 기본 경로 사용: config/account_synonyms.toml
        """
        self.synonyms = synonyms or load_account_synonyms(config_path)

    # ---------------------------------------------------------------------
    # 계정 분리 및 주요 지표
    # ---------------------------------------------------------------------
    @staticmethod
    def split_statements(
        items: Sequence[LineItem]
    ) -> Tuple[List[LineItem], List[LineItem], List[LineItem]]:
        """연결 기준 (재무상태표, 손익계산서, 현금흐름표) 계정으로 분리."""
        consolidated = [item for item in items if item.is_consolidated]
        return (
            [item for item in consolidated if item.statement_type is StatementType.BALANCE_SHEET],
            [item for item in consolidated if item.statement_type is StatementType.INCOME_STATEMENT],
            [item for item in consolidated if item.statement_type is StatementType.CASH_FLOW],
        )

    def key_metrics(self, items: Sequence[LineItem]) -> Dict[str, Optional[PeriodTriple]]:
        """주요 계정 6종의 기간별 금액 (계정이 없으면 None)."""
        bs, is_, _ = self.split_statements(items)
        return self._key_metrics(bs, is_)

    def _key_metrics(
        self,
        bs: Sequence[LineItem],
        is_: Sequence[LineItem]
    ) -> Dict[str, Optional[PeriodTriple]]:
        s = self.synonyms
        return {
            "total_assets": lookup_with_synonyms(s.total_assets, bs),
            "total_liabilities": lookup_with_synonyms(s.total_liabilities, bs),
            "total_equity": lookup_with_synonyms(s.total_equity, bs),
            "revenue": lookup_with_synonyms(s.revenue, is_),
            "operating_income": lookup_with_synonyms(s.operating_income, is_),
            "net_income": lookup_with_synonyms(s.net_income, is_),
        }

    def analyze(self, items: Sequence[LineItem]) -> DisclosureMetrics:
        """주요 지표, 재무비율, 성장률, 매출액 CAGR을 한 번에 계산."""
        bs, is_, _ = self.split_statements(items)
        key_metrics = self._key_metrics(bs, is_)
        revenue = key_metrics["revenue"]

        return DisclosureMetrics(
            key_metrics=key_metrics,
            ratios=compute_ratios(bs, is_, self.synonyms),
            growth=compute_growth(bs, is_, self.synonyms),
            revenue_cagr=compute_cagr(
                period_value(revenue, PRIOR_PRIOR),
                period_value(revenue, CURRENT),
                _CAGR_YEARS,
            ),
        )

    # ---------------------------------------------------------------------
    # 차트 시리즈
    # ---------------------------------------------------------------------
    def ratio_series(self, items: Sequence[LineItem]) -> List[ChartPoint]:
        """재무비율 비교 차트 (당기/전기 모두 없는 비율은 제외)."""
        bs, is_, _ = self.split_statements(items)
        ratios = compute_ratios(bs, is_, self.synonyms)
        points = [
            ChartPoint(
                name=label,
                current=getattr(ratios.current, key),
                prior=getattr(ratios.prior, key),
                prior_prior=_attr_or_none(ratios.prior_prior, key),
            )
            for key, label in RATIO_LABELS.items()
        ]
        return [p for p in points if p.current is not None or p.prior is not None]

    def growth_series(self, items: Sequence[LineItem]) -> List[ChartPoint]:
        """성장률 비교 차트 (당기/전기 모두 없는 성장률은 제외)."""
        bs, is_, _ = self.split_statements(items)
        growth = compute_growth(bs, is_, self.synonyms)
        points = [
            ChartPoint(
                name=label,
                current=getattr(growth.current, key),
                prior=_attr_or_none(growth.prior, key),
            )
            for key, label in GROWTH_LABELS.items()
        ]
        return [p for p in points if p.current is not None or p.prior is not None]

    def key_metric_series(self, items: Sequence[LineItem]) -> List[ChartPoint]:
        """주요 계정 금액 비교 차트 (계정이 없는 항목은 제외)."""
        points = []
        for key, triple in self.key_metrics(items).items():
            if triple is None:
                continue
            points.append(ChartPoint(
                name=KEY_METRIC_LABELS[key],
                current=triple.current,
                prior=triple.prior,
                prior_prior=triple.prior_prior,
            ))
        return points

    def balance_sheet_series(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """재무상태표 당기/전기 구성 (계정이 없으면 0)."""
        metrics = self.key_metrics(items)
        return self._amount_trend(metrics, ("total_assets", "total_liabilities", "total_equity"), (CURRENT, PRIOR))

    def income_statement_series(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """손익계산서 당기/전기 구성 (계정이 없으면 0)."""
        metrics = self.key_metrics(items)
        return self._amount_trend(metrics, ("revenue", "operating_income", "net_income"), (CURRENT, PRIOR))

    def profitability_trend(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """영업이익률/순이익률 추이."""
        return self._ratio_trend(items, ("operating_margin", "net_margin"))

    def stability_trend(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """부채비율/유동비율/자기자본비율 추이."""
        return self._ratio_trend(items, ("debt_ratio", "current_ratio", "equity_ratio"))

    def capital_structure_series(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """부채/자본 구조 추이 (부채와 자본이 모두 0인 기간은 제외)."""
        metrics = self.key_metrics(items)
        points = []
        for period in _TREND_PERIODS:
            debt = period_value(metrics["total_liabilities"], period) or 0
            equity = period_value(metrics["total_equity"], period) or 0
            if debt > 0 or equity > 0:
                points.append(TrendPoint(PERIOD_LABELS[period], {"부채": debt, "자본": equity}))
        return points

    def cash_flow_trend(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """영업/투자/재무 현금흐름과 잉여현금흐름 추이.

        잉여현금흐름 = 영업현금흐름 + 투자현금흐름 (둘 다 있을 때만).
        세 현금흐름이 모두 없는 기간은 제외한다.
        """
        _, _, cf = self.split_statements(items)
        s = self.synonyms
        operating = lookup_with_synonyms(s.operating_cash_flow, cf)
        investing = lookup_with_synonyms(s.investing_cash_flow, cf)
        financing = lookup_with_synonyms(s.financing_cash_flow, cf)

        points = []
        for period in _TREND_PERIODS:
            op = period_value(operating, period)
            inv = period_value(investing, period)
            fin = period_value(financing, period)
            if op is None and inv is None and fin is None:
                continue
            free = op + inv if op is not None and inv is not None else None
            points.append(TrendPoint(PERIOD_LABELS[period], {
                "영업현금흐름": op,
                "투자현금흐름": inv,
                "재무현금흐름": fin,
                "자유현금흐름": free,
            }))
        return points

    def cash_flow_vs_net_income(self, items: Sequence[LineItem]) -> List[TrendPoint]:
        """영업현금흐름 대비 당기순이익 추이."""
        _, is_, cf = self.split_statements(items)
        operating = lookup_with_synonyms(self.synonyms.operating_cash_flow, cf)
        net_income = lookup_with_synonyms(self.synonyms.net_income, is_)

        points = []
        for period in _TREND_PERIODS:
            op = period_value(operating, period)
            income = period_value(net_income, period) or 0
            if op is None and income == 0:
                continue
            points.append(TrendPoint(PERIOD_LABELS[period], {"영업현금흐름": op, "당기순이익": income}))
        return points

    def chart_series(self, items: Sequence[LineItem]) -> Dict[str, list]:
        """표시/내보내기용 전체 차트 시리즈 {차트명: 포인트 목록}."""
        return {
            "주요지표": self.key_metric_series(items),
            "재무상태표": self.balance_sheet_series(items),
            "손익계산서": self.income_statement_series(items),
            "재무비율": self.ratio_series(items),
            "성장률": self.growth_series(items),
            "수익성추이": self.profitability_trend(items),
            "안정성추이": self.stability_trend(items),
            "자본구조": self.capital_structure_series(items),
            "현금흐름": self.cash_flow_trend(items),
            "현금흐름vs순이익": self.cash_flow_vs_net_income(items),
        }

    # ---------------------------------------------------------------------
    # 내부 헬퍼
    # ---------------------------------------------------------------------
    def _ratio_trend(self, items: Sequence[LineItem], keys: Tuple[str, ...]) -> List[TrendPoint]:
        bs, is_, _ = self.split_statements(items)
        ratios = compute_ratios(bs, is_, self.synonyms)
        by_period = {CURRENT: ratios.current, PRIOR: ratios.prior, PRIOR_PRIOR: ratios.prior_prior}

        points = []
        for period in _TREND_PERIODS:
            values = {RATIO_LABELS[key]: _attr_or_none(by_period[period], key) for key in keys}
            if any(value is not None for value in values.values()):
                points.append(TrendPoint(PERIOD_LABELS[period], values))
        return points

    @staticmethod
    def _amount_trend(
        metrics: Dict[str, Optional[PeriodTriple]],
        keys: Tuple[str, ...],
        periods: Tuple[str, ...]
    ) -> List[TrendPoint]:
        return [
            TrendPoint(
                PERIOD_LABELS[period],
                {KEY_METRIC_LABELS[key]: period_value(metrics[key], period) or 0 for key in keys},
            )
            for period in periods
        ]


def _attr_or_none(record: Optional[object], key: str) -> Optional[float]:
    """FinancialRatios/GrowthRates가 None일 수 있을 때의 속성 조회."""
    if record is None:
        return None
    return getattr(record, key)
