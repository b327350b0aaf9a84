"""Unit tests for LLMClient provider selection and error translation."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import openai
import pytest

from tripmatch.exceptions import LLMConfigurationError, LLMRateLimitError, LLMUnavailableError
from tripmatch.services.llm_client import LLMClient


def _status_response(code: int, url: str) -> httpx.Response:
    return httpx.Response(code, request=httpx.Request("POST", url))


def _openai_rate_limit() -> openai.RateLimitError:
    return openai.RateLimitError(
        "rate limited",
        response=_status_response(429, "https://api.openai.com/v1/chat/completions"),
        body=None,
    )


def _anthropic_rate_limit() -> anthropic.RateLimitError:
    return anthropic.RateLimitError(
        "rate limited",
        response=_status_response(429, "https://api.anthropic.com/v1/messages"),
        body=None,
    )


def _openai_mock(create: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = create
    return MagicMock(return_value=client)


def _anthropic_mock(create: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.messages.create = create
    return MagicMock(return_value=client)


def _openai_completion(text: str):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


def _anthropic_message(text: str):
    return SimpleNamespace(content=[SimpleNamespace(text=text)])


@pytest.fixture
def no_keys(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")


class TestLLMClient:
    @pytest.mark.asyncio
    async def test_missing_keys_is_configuration_error(self, no_keys):
        with pytest.raises(LLMConfigurationError) as exc_info:
            await LLMClient().complete("system", "user")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_key_read_at_call_time(self, no_keys, monkeypatch):
        client = LLMClient()
        with pytest.raises(LLMConfigurationError):
            await client.complete("system", "user")

        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        create = AsyncMock(return_value=_openai_completion(' {"matches": []} '))
        with patch("tripmatch.services.llm_client.AsyncOpenAI", _openai_mock(create)):
            assert await client.complete("system", "user") == '{"matches": []}'

    @pytest.mark.asyncio
    async def test_openai_json_mode(self, no_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        create = AsyncMock(return_value=_openai_completion('{"matches": []}'))
        with patch("tripmatch.services.llm_client.AsyncOpenAI", _openai_mock(create)):
            await LLMClient().complete("sys", "beach", temperature=0.1, json_mode=True)

        kwargs = create.await_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.1
        assert kwargs["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "beach"},
        ]

    @pytest.mark.asyncio
    async def test_falls_back_to_anthropic(self, no_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        openai_create = AsyncMock(side_effect=RuntimeError("boom"))
        anthropic_create = AsyncMock(return_value=_anthropic_message('{"matches": []}'))

        with (
            patch("tripmatch.services.llm_client.AsyncOpenAI", _openai_mock(openai_create)),
            patch("anthropic.AsyncAnthropic", _anthropic_mock(anthropic_create)),
        ):
            result = await LLMClient().complete("sys", "beach")

        assert result == '{"matches": []}'
        anthropic_create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_openai_rate_limit_surfaces_as_rate_limit(self, no_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        create = AsyncMock(side_effect=_openai_rate_limit())
        with patch("tripmatch.services.llm_client.AsyncOpenAI", _openai_mock(create)):
            with pytest.raises(LLMRateLimitError) as exc_info:
                await LLMClient().complete("sys", "beach")
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_anthropic_rate_limit_surfaces_as_rate_limit(self, no_keys, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        create = AsyncMock(side_effect=_anthropic_rate_limit())
        with patch("anthropic.AsyncAnthropic", _anthropic_mock(create)):
            with pytest.raises(LLMRateLimitError):
                await LLMClient().complete("sys", "beach")

    @pytest.mark.asyncio
    async def test_generic_failure_is_unavailable(self, no_keys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        create = AsyncMock(side_effect=RuntimeError("connection reset"))
        with patch("tripmatch.services.llm_client.AsyncOpenAI", _openai_mock(create)):
            with pytest.raises(LLMUnavailableError) as exc_info:
                await LLMClient().complete("sys", "beach")
        assert exc_info.value.status_code == 502
        assert "connection reset" not in exc_info.value.message
