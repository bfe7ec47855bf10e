"""차트 시리즈 내보내기를 위한 포트 인터페이스."""

from abc import ABC, abstractmethod
from typing import Dict
import pandas as pd


class StoragePort(ABC):
    """차트 시리즈 저장 포트.

    시트 하나가 차트 하나(주요지표, 재무비율, 현금흐름 등)이며, 행은 항목명 또는
    기간(전전기/전기/당기), 열은 기간 또는 지표명이다.
    """

    @abstractmethod
    def save_excel_with_sheets(
        self,
        dataframes: Dict[str, pd.DataFrame],
        file_path: str
    ) -> None:
        """여러 DataFrame을 단일 엑셀 파일에 다중 시트로 저장.
        
        Args:
            dataframes: {차트명: DataFrame} 딕셔너리 (빈 DataFrame은 저장하지 않는다)
            file_path: 저장할 엑셀 파일 경로
        """
        raise NotImplementedError
