import logging
import os
import zipfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

import requests

from dart_insight.core.domain.exceptions import ConfigurationError, DartApiError
from dart_insight.core.domain.models.company import Company
from dart_insight.core.ports.corp_code_port import CorpCodePort

logger = logging.getLogger(__name__)


def parse_corp_xml(xml_path: Union[str, Path]) -> List[Company]:
    """``CORPCODE.xml`` 의 ``<list>`` 레코드를 Company 목록으로 변환한다.

    각 필드는 앞뒤 공백을 제거하며, 고유번호나 기업명이 비어 있는 레코드는 버린다.
    """
    root = ET.parse(xml_path).getroot()
    companies = []
    for corp in root.iter("list"):
        code = (corp.findtext("corp_code") or "").strip()
        name = (corp.findtext("corp_name") or "").strip()
        if not code or not name:
            continue
        companies.append(Company(
            corp_code=code,
            corp_name=name,
            corp_eng_name=(corp.findtext("corp_eng_name") or "").strip(),
            stock_code=(corp.findtext("stock_code") or "").strip(),
            modify_date=(corp.findtext("modify_date") or "").strip(),
        ))
    return companies


class CorpCodeAdapter(CorpCodePort):
    """OpenDart 고유번호 XML 기반 기업 목록 어댑터.

    - 최초 생성 시 DART에서 제공하는 ``corpCode.zip`` 파일을 다운로드하고
      ``CORPCODE.xml`` 을 추출한다.
    - 파일이 이미 존재하면 재다운로드하지 않는다. ``force_download``
      플래그를 통해 강제 업데이트 가능.
    """

    _API_URL = "https://opendart.fss.or.kr/api/corpCode.xml"

    def __init__(
        self,
        api_key: Optional[str] = None,
        cache_dir: Optional[Union[str, Path]] = None,
        force_download: bool = False,
        timeout: float = 30,
    ) -> None:
        """생성자.

        Args:
            api_key: DART API 키 (None이면 환경변수에서 읽음)
            cache_dir: zip/XML 저장 디렉터리 (기본 ``$OUTPUT_DIRECTORY/corp_code``)
            force_download: ``True``이면 항상 최신 XML을 다운로드한다.
            timeout: 다운로드 타임아웃 (초)
        """
        self._api_key = api_key or os.getenv("DART_API_KEY") or os.getenv("OPEN_DART_API_KEY")
        if cache_dir is None:
            cache_dir = Path(os.getenv("OUTPUT_DIRECTORY", "./data")) / "corp_code"
        self._cache_dir = Path(cache_dir).resolve()
        self._zip_path = self._cache_dir / "corpCode.zip"
        self._xml_path = self._cache_dir / "CORPCODE.xml"
        self._timeout = timeout
        self._ensure_data(force_download)

    @property
    def xml_path(self) -> Path:
        return self._xml_path

    def _ensure_data(self, force_download: bool) -> None:
        """XML 데이터가 없으면 다운로드하고 압축을 푼다."""
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        if force_download or not self._xml_path.is_file():
            self._download_and_extract()

    def _download_and_extract(self) -> None:
        """DART API 로부터 ``corpCode.zip`` 을 받아 압축을 푼다."""
        if not self._api_key:
            raise ConfigurationError("DART_API_KEY 환경 변수가 설정되지 않았습니다.")

        logger.info(f"고유번호 파일 다운로드: {self._zip_path}")
        try:
            response = requests.get(self._API_URL, params={"crtfc_key": self._api_key}, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DartApiError(f"고유번호 파일 다운로드 실패: {e}") from e

        self._zip_path.write_bytes(response.content)
        try:
            with zipfile.ZipFile(self._zip_path, "r") as z:
                # zip 안에 CORPCODE.xml 이 하나만 존재한다.
                z.extractall(self._cache_dir)
        except zipfile.BadZipFile as e:
            # 키 오류 등은 zip 대신 JSON/XML 오류 본문이 내려온다.
            raise DartApiError("고유번호 파일이 올바른 zip 형식이 아닙니다.") from e
        if not self._xml_path.is_file():
            raise FileNotFoundError("압축 해제 후 CORPCODE.xml 파일을 찾을 수 없습니다.")

    def get_companies(self) -> List[Company]:
        companies = parse_corp_xml(self._xml_path)
        logger.info(f"CORPCODE.xml에서 {len(companies)}개 기업 로드")
        return companies
