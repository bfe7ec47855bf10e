"""GeminiSummaryAdapter 테스트 (가짜 클라이언트 주입)."""

import os
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import pytest
from google.genai import errors

from dart_insight.core.domain.exceptions import ConfigurationError, SummaryError
from dart_insight.infra.adapters.gemini_summary_adapter import FALLBACK_TEXT, GeminiSummaryAdapter


def make_client(text=None, error=None):
    client = MagicMock()
    if error is not None:
        client.models.generate_content.side_effect = error
    else:
        client.models.generate_content.return_value = SimpleNamespace(text=text)
    return client


def test_summarize_returns_model_text():
    client = make_client(text="재무 상태가 안정적입니다.")
    adapter = GeminiSummaryAdapter(model="gemini-2.5-flash", client=client)

    assert adapter.summarize("프롬프트") == "재무 상태가 안정적입니다."
    client.models.generate_content.assert_called_once_with(model="gemini-2.5-flash", contents="프롬프트")


@pytest.mark.parametrize("text", [None, ""])
def test_empty_response_uses_fallback(text):
    adapter = GeminiSummaryAdapter(client=make_client(text=text))

    assert adapter.summarize("프롬프트") == FALLBACK_TEXT


def test_api_error_is_wrapped():
    error = errors.APIError(429, {"error": {"message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}})
    adapter = GeminiSummaryAdapter(client=make_client(error=error))

    with pytest.raises(SummaryError, match="Resource exhausted"):
        adapter.summarize("프롬프트")


@pytest.mark.parametrize("error", [
    httpx.ReadTimeout("timed out"),
    httpx.ConnectError("connection refused"),
])
def test_transport_error_is_wrapped(error):
    """타임아웃, 연결 실패도 SummaryError로 변환된다."""
    adapter = GeminiSummaryAdapter(client=make_client(error=error))

    with pytest.raises(SummaryError) as exc_info:
        adapter.summarize("프롬프트")

    assert exc_info.value.__cause__ is error


def test_missing_api_key():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ConfigurationError):
            GeminiSummaryAdapter()


def test_client_built_with_timeout():
    with patch("google.genai.Client") as client_cls:
        GeminiSummaryAdapter(api_key="dummy", timeout_seconds=2)

    _, kwargs = client_cls.call_args
    assert kwargs["api_key"] == "dummy"
    assert kwargs["http_options"].timeout == 2000
