from enum import StrEnum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LlmProviderType(StrEnum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class LlmSettings(BaseSettings):
    llm_provider: LlmProviderType = Field(default=LlmProviderType.ANTHROPIC, alias="LLM_PROVIDER")
    llm_model: str = Field(default="claude-sonnet-4-5", alias="LLM_MODEL")
    anthropic_api_key: SecretStr | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    llm_max_tokens: int = Field(default=8192, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(default=240.0, alias="LLM_TIMEOUT_SECONDS")
    llm_max_attempts: int = Field(default=5, alias="LLM_MAX_ATTEMPTS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)
