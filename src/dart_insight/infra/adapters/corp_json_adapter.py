"""정적 기업 목록(JSON) 파일 어댑터."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Sequence, Union

from dart_insight.core.domain.models.company import Company
from dart_insight.core.ports.corp_code_port import CorpCodePort

logger = logging.getLogger(__name__)


class CorpJsonAdapter(CorpCodePort):
    """``corp.json`` 에서 기업 목록을 읽는 어댑터.

    파일 형식은 ``corp_code``, ``corp_name``, ``corp_eng_name``, ``stock_code``,
    ``modify_date`` 키를 가진 객체의 배열이다.
    """

    def __init__(self, file_path: Union[str, Path]):
        self._file_path = Path(file_path)

    def get_companies(self) -> List[Company]:
        """기업 목록을 읽어옵니다.

        Raises:
            FileNotFoundError: 파일이 존재하지 않을 경우
        """
        if not self._file_path.exists():
            raise FileNotFoundError(f"파일을 찾을 수 없습니다: {self._file_path}")

        with self._file_path.open("r", encoding="utf-8") as f:
            records = json.load(f)

        companies = [
            Company(
                corp_code=record.get("corp_code", ""),
                corp_name=record.get("corp_name", ""),
                corp_eng_name=record.get("corp_eng_name", ""),
                stock_code=record.get("stock_code", ""),
                modify_date=record.get("modify_date", ""),
            )
            for record in records
            if record.get("corp_code") and record.get("corp_name")
        ]
        logger.info(f"{self._file_path}에서 {len(companies)}개 기업 로드")
        return companies

    def save_companies(self, companies: Sequence[Company]) -> None:
        """기업 목록을 JSON 파일로 저장 (UTF-8, 들여쓰기 2)."""
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self._file_path.open("w", encoding="utf-8") as f:
            json.dump([asdict(c) for c in companies], f, ensure_ascii=False, indent=2)
        logger.info(f"{len(companies)}개 기업을 {self._file_path}에 저장")
