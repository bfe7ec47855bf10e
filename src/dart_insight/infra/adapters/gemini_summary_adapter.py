"""Gemini 기반 AI 요약 어댑터."""

import logging
import os
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors, types

from dart_insight.core.domain.exceptions import ConfigurationError, SummaryError
from dart_insight.core.ports.summary_port import SummaryPort

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
FALLBACK_TEXT = "분석 결과를 생성할 수 없습니다."


class GeminiSummaryAdapter(SummaryPort):
    """google-genai 클라이언트로 분석 텍스트를 생성하는 어댑터.

    테스트에서는 ``client`` 에 ``models.generate_content`` 를 가진 가짜 객체를 넘긴다.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = 120,
        client: Optional[Any] = None,
    ):
        self._model = model
        if client is not None:
            self._client = client
            return

        api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY가 설정되지 않았습니다.")
        # HttpOptions.timeout 단위는 밀리초
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )

    def summarize(self, prompt: str) -> str:
        logger.info(f"Gemini 요청: model={self._model}")
        try:
            response = self._client.models.generate_content(model=self._model, contents=prompt)
        except errors.APIError as e:
            logger.error(f"Gemini API 오류: {e}")
            raise SummaryError(e.message or str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini 요청 실패: {e!r}")
            raise SummaryError(f"Gemini 요청 실패: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            logger.warning("Gemini 응답이 비어 있습니다.")
            return FALLBACK_TEXT
        return text
