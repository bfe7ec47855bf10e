from abc import ABC, abstractmethod
from typing import List

from dart_insight.core.domain.models.company import Company


class CorpCodePort(ABC):
    """기업 목록(고유번호) 조회를 위한 포트 인터페이스.

    서비스 레이어는 이 인터페이스에만 의존하고, 실제 구현(어댑터)은
    OpenDart 고유번호 XML 또는 정적 JSON 파일에서 목록을 읽는다.
    검색 인덱스는 이 목록으로 프로세스 시작 시 한 번만 만들어진다.
    """

    @abstractmethod
    def get_companies(self) -> List[Company]:
        """전체 기업 목록을 반환한다.

        Returns:
            List[Company]: 고유번호와 기업명이 모두 있는 기업만 포함한다.
        """
        raise NotImplementedError
