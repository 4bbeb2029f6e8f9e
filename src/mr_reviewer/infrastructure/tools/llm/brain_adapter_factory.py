from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from mr_reviewer.core.application.ports import BrainPort
from mr_reviewer.infrastructure.common.retry import RetryPolicy
from mr_reviewer.infrastructure.configuration.llm_settings import LlmProviderType, LlmSettings
from mr_reviewer.infrastructure.tools.llm.anthropic_brain_adapter import AnthropicBrainAdapter
from mr_reviewer.infrastructure.tools.llm.openai_brain_adapter import OpenAiBrainAdapter


def build_brain(settings: LlmSettings) -> BrainPort:
    """Build the configured model adapter.

    SDK-level retries are disabled; RetryPolicy owns the retry budget.
    """
    retry = RetryPolicy(max_attempts=settings.llm_max_attempts)
    if settings.llm_provider == LlmProviderType.OPENAI:
        if settings.openai_api_key is None:
            raise ValueError("OPENAI_API_KEY is required when LLM_PROVIDER=openai")
        client = AsyncOpenAI(
            api_key=settings.openai_api_key.get_secret_value(),
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )
        return OpenAiBrainAdapter(
            client=client, model=settings.llm_model, max_tokens=settings.llm_max_tokens, retry=retry
        )

    if settings.anthropic_api_key is None:
        raise ValueError("ANTHROPIC_API_KEY is required when LLM_PROVIDER=anthropic")
    client = AsyncAnthropic(
        api_key=settings.anthropic_api_key.get_secret_value(),
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )
    return AnthropicBrainAdapter(
        client=client, model=settings.llm_model, max_tokens=settings.llm_max_tokens, retry=retry
    )
