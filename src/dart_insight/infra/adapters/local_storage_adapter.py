"""로컬 파일 시스템 저장 어댑터."""

import logging
from pathlib import Path
from typing import Dict

import pandas as pd

from dart_insight.core.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)

# 엑셀 시트명 최대 길이
_MAX_SHEET_NAME = 31


class LocalStorageAdapter(StoragePort):
    """로컬 파일 시스템에 차트 시리즈를 저장하는 어댑터.

    - pandas + openpyxl을 사용한 엑셀 파일 생성
    - 단일 파일에 다중 시트 저장 지원
    """

    def __init__(self, ensure_dir: bool = True):
        """초기화.

        Args:
            ensure_dir: True이면 저장 전 디렉터리 자동 생성
        """
        self._ensure_dir = ensure_dir

    def save_excel_with_sheets(
        self,
        dataframes: Dict[str, pd.DataFrame],
        file_path: str
    ) -> None:
        """여러 DataFrame을 단일 엑셀 파일에 다중 시트로 저장.

        빈 DataFrame은 건너뛰며, 모두 비어 있으면 안내 시트 하나만 쓴다.
        """
        if self._ensure_dir:
            Path(file_path).parent.mkdir(parents=True, exist_ok=True)

        sheets = {name[:_MAX_SHEET_NAME]: df for name, df in dataframes.items() if not df.empty}
        if not sheets:
            sheets = {"데이터없음": pd.DataFrame({"안내": ["조회된 재무 데이터가 없습니다."]})}

        with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
            for sheet_name, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet_name, index=True)

            # 열 너비 자동 맞춤
            for worksheet in writer.sheets.values():
                for column_cells in worksheet.iter_cols():
                    max_length = max(
                        len(str(cell.value)) if cell.value is not None else 0
                        for cell in column_cells
                    )
                    worksheet.column_dimensions[column_cells[0].column_letter].width = max_length + 2

        logger.info(f"엑셀 저장 완료: {file_path} ({len(sheets)}개 시트)")
