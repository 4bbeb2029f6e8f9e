import logging
from dataclasses import dataclass
from typing import Any

import openai

from mr_reviewer.core.application.exceptions import ProviderError
from mr_reviewer.core.application.ports import BrainPort
from mr_reviewer.infrastructure.common.retry import RetryPolicy
from mr_reviewer.infrastructure.configuration.llm_settings import LlmProviderType
from mr_reviewer.infrastructure.tools.llm.sdk_error_mapper import map_sdk_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenAiBrainAdapter(BrainPort):
    client: Any
    model: str
    max_tokens: int
    retry: RetryPolicy

    async def generate(self, prompt: str) -> str:
        logger.debug("OpenAI request model=%s prompt_chars=%d", self.model, len(prompt))
        return await self.retry.run(lambda: self._call(prompt))

    async def _call(self, prompt: str) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as exc:
            raise map_sdk_error(LlmProviderType.OPENAI.value, openai, exc) from exc
        choices = resp.choices or []
        text = choices[0].message.content if choices else None
        if not text:
            raise ProviderError(
                provider=LlmProviderType.OPENAI.value,
                message="Empty completion",
                retryable=False,
            )
        return text
