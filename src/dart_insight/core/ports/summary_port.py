"""AI 요약 포트 인터페이스."""

from abc import ABC, abstractmethod


class SummaryPort(ABC):
    """언어 모델에 프롬프트를 보내 분석 텍스트를 받는 포트."""

    @abstractmethod
    def summarize(self, prompt: str) -> str:
        """프롬프트에 대한 자유 형식 분석 텍스트를 반환한다.

        Raises:
            SummaryError: 모델 API 호출이 실패한 경우
        """
        raise NotImplementedError
