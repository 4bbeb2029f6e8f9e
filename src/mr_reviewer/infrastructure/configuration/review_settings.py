from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mr_reviewer.core.application.skills.review.contracts import PromptStrategy, ResponseFormat


class ReviewSettings(BaseSettings):
    max_full_content_lines: int = Field(default=10_000, alias="REVIEW_MAX_FULL_CONTENT_LINES")
    min_description_length: int = Field(default=10, alias="REVIEW_MIN_DESCRIPTION_LENGTH")
    response_format: ResponseFormat = Field(
        default=ResponseFormat.JSON, alias="REVIEW_RESPONSE_FORMAT"
    )
    prompt_file: str | None = Field(default=None, alias="REVIEW_PROMPT_FILE")
    prompt_strategy: PromptStrategy = Field(
        default=PromptStrategy.APPEND, alias="REVIEW_PROMPT_STRATEGY"
    )
    project_prompts_file: Path | None = Field(default=None, alias="REVIEW_PROJECT_PROMPTS_FILE")
    dry_run: bool = Field(default=False, alias="REVIEW_DRY_RUN")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)
