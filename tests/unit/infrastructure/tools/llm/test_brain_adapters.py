"""Unit tests for the model adapters — zero I/O, SDK clients mocked."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import openai
import pytest
from pydantic import SecretStr

from mr_reviewer.core.application.exceptions import ProviderError
from mr_reviewer.infrastructure.common.retry import RetryPolicy
from mr_reviewer.infrastructure.configuration.llm_settings import LlmProviderType, LlmSettings
from mr_reviewer.infrastructure.tools.llm import (
    AnthropicBrainAdapter,
    OpenAiBrainAdapter,
    build_brain,
)

NO_WAIT = RetryPolicy(max_attempts=3, initial_wait=0, max_wait=0)
REQUEST = httpx.Request("POST", "https://api.example.com/v1")


def _status_error(sdk, cls_name: str, status: int) -> Exception:
    response = httpx.Response(status, request=REQUEST, json={"error": {"message": "x"}})
    return getattr(sdk, cls_name)(message=f"{status} error", response=response, body=None)


def _anthropic_response(*texts: str) -> SimpleNamespace:
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text) for text in texts])


def _openai_response(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _anthropic_adapter(create: AsyncMock) -> AnthropicBrainAdapter:
    client = MagicMock()
    client.messages.create = create
    return AnthropicBrainAdapter(client=client, model="claude-test", max_tokens=100, retry=NO_WAIT)


def _openai_adapter(create: AsyncMock) -> OpenAiBrainAdapter:
    client = MagicMock()
    client.chat.completions.create = create
    return OpenAiBrainAdapter(client=client, model="gpt-test", max_tokens=100, retry=NO_WAIT)


# ══════════════════════════════════════════════════════════════
#  Anthropic
# ══════════════════════════════════════════════════════════════


class TestAnthropicBrainAdapter:
    @pytest.mark.asyncio
    async def test_joins_text_blocks(self) -> None:
        create = AsyncMock(return_value=_anthropic_response('{"summary": ', '"ok"}'))
        text = await _anthropic_adapter(create).generate("review this")

        assert text == '{"summary": "ok"}'
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["messages"] == [{"role": "user", "content": "review this"}]

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(self) -> None:
        create = AsyncMock(
            side_effect=[
                _status_error(anthropic, "RateLimitError", 429),
                _anthropic_response("done"),
            ]
        )
        assert await _anthropic_adapter(create).generate("p") == "done"
        assert create.await_count == 2

    @pytest.mark.asyncio
    async def test_auth_error_is_not_retried(self) -> None:
        create = AsyncMock(side_effect=_status_error(anthropic, "AuthenticationError", 401))
        with pytest.raises(ProviderError) as exc_info:
            await _anthropic_adapter(create).generate("p")
        assert exc_info.value.status_code == 401
        assert exc_info.value.provider == "anthropic"
        assert create.await_count == 1

    @pytest.mark.asyncio
    async def test_server_error_is_retryable_but_not_retried(self) -> None:
        create = AsyncMock(side_effect=_status_error(anthropic, "InternalServerError", 500))
        with pytest.raises(ProviderError) as exc_info:
            await _anthropic_adapter(create).generate("p")
        assert exc_info.value.retryable
        assert create.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_completion_raises(self) -> None:
        create = AsyncMock(return_value=_anthropic_response())
        with pytest.raises(ProviderError, match="Empty completion"):
            await _anthropic_adapter(create).generate("p")


# ══════════════════════════════════════════════════════════════
#  OpenAI
# ══════════════════════════════════════════════════════════════


class TestOpenAiBrainAdapter:
    @pytest.mark.asyncio
    async def test_returns_first_choice(self) -> None:
        create = AsyncMock(return_value=_openai_response("## Summary\nok"))
        assert await _openai_adapter(create).generate("p") == "## Summary\nok"

    @pytest.mark.asyncio
    async def test_rate_limit_exhausts_attempts(self) -> None:
        create = AsyncMock(side_effect=_status_error(openai, "RateLimitError", 429))
        with pytest.raises(ProviderError) as exc_info:
            await _openai_adapter(create).generate("p")
        assert exc_info.value.is_rate_limited
        assert create.await_count == 3

    @pytest.mark.asyncio
    async def test_connection_error_is_retryable(self) -> None:
        create = AsyncMock(side_effect=openai.APIConnectionError(request=REQUEST))
        with pytest.raises(ProviderError) as exc_info:
            await _openai_adapter(create).generate("p")
        assert exc_info.value.retryable
        assert exc_info.value.provider == "openai"


# ══════════════════════════════════════════════════════════════
#  build_brain
# ══════════════════════════════════════════════════════════════


class TestBuildBrain:
    def test_anthropic_by_default(self) -> None:
        settings = LlmSettings(_env_file=None, ANTHROPIC_API_KEY=SecretStr("sk-ant-x"))
        brain = build_brain(settings)
        assert isinstance(brain, AnthropicBrainAdapter)
        assert brain.model == settings.llm_model

    def test_openai_when_selected(self) -> None:
        settings = LlmSettings(
            _env_file=None,
            LLM_PROVIDER=LlmProviderType.OPENAI,
            LLM_MODEL="gpt-4o",
            OPENAI_API_KEY=SecretStr("sk-x"),
            LLM_MAX_ATTEMPTS=2,
        )
        brain = build_brain(settings)
        assert isinstance(brain, OpenAiBrainAdapter)
        assert brain.retry.max_attempts == 2

    def test_missing_key_is_rejected(self) -> None:
        settings = LlmSettings(
            _env_file=None, LLM_PROVIDER=LlmProviderType.OPENAI, OPENAI_API_KEY=None
        )
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            build_brain(settings)
