"""차트 시리즈 엑셀 내보내기 서비스."""

import logging
from typing import Dict, Sequence, Union

import pandas as pd

from dart_insight.core.domain.models.disclosure import LineItem
from dart_insight.core.domain.models.financial_metrics import ChartPoint, TrendPoint
from dart_insight.core.ports.storage_port import StoragePort
from dart_insight.core.services.metrics_service import PERIOD_LABELS, MetricsService
from dart_insight.core.services.ratio_service import CURRENT, PRIOR, PRIOR_PRIOR

logger = logging.getLogger(__name__)

Point = Union[ChartPoint, TrendPoint]


def series_to_frame(points: Sequence[Point]) -> pd.DataFrame:
    """차트 포인트 목록을 DataFrame으로 변환.

    - ChartPoint: 행 = 항목명, 열 = 당기/전기/전전기 (전전기 값이 하나도 없으면 열 생략)
    - TrendPoint: 행 = 기간, 열 = 지표명
    """
    if not points:
        return pd.DataFrame()

    if isinstance(points[0], ChartPoint):
        columns = [PERIOD_LABELS[CURRENT], PERIOD_LABELS[PRIOR]]
        rows = [[p.current, p.prior] for p in points]
        if any(p.prior_prior is not None for p in points):
            columns.append(PERIOD_LABELS[PRIOR_PRIOR])
            rows = [row + [p.prior_prior] for row, p in zip(rows, points)]
        return pd.DataFrame(rows, index=[p.name for p in points], columns=columns)

    return pd.DataFrame([p.values for p in points], index=[p.period for p in points])


class ReportExportService:
    """공시 계정에서 차트 시리즈를 만들어 다중 시트 엑셀로 저장."""

    def __init__(self, metrics_service: MetricsService, storage_port: StoragePort):
        self._metrics_service = metrics_service
        self._storage_port = storage_port

    def build_frames(self, items: Sequence[LineItem]) -> Dict[str, pd.DataFrame]:
        """{시트명: DataFrame} (시트명 = 차트명)."""
        return {
            name: series_to_frame(points)
            for name, points in self._metrics_service.chart_series(items).items()
        }

    def export(self, items: Sequence[LineItem], file_path: str) -> Dict[str, pd.DataFrame]:
        frames = self.build_frames(items)
        logger.info(f"차트 시리즈 {len(frames)}종 저장: {file_path}")
        self._storage_port.save_excel_with_sheets(frames, file_path)
        return frames
