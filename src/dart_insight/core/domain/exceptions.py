"""도메인 예외.

계정 누락, 금액 파싱 실패, 0으로 나누기는 예외가 아니다 (``None`` 또는 0으로 표현).
여기 정의된 예외는 외부 API 호출 실패와 설정 누락에만 사용한다.
"""

from typing import Optional


class DartInsightError(Exception):
    """프로젝트 공통 예외."""


class ConfigurationError(DartInsightError):
    """API 키 등 필수 설정이 없을 때."""


class DartApiError(DartInsightError):
    """OpenDart API 호출 실패.

    Attributes:
        status: OpenDart 응답 상태 코드 (전송 오류면 None)
        message: 사용자에게 그대로 보여줄 메시지
    """

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.message = message


class SummaryError(DartInsightError):
    """AI 요약(Gemini) 호출 실패."""
