from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitLabSettings(BaseSettings):
    """Settings for the GitLab REST API."""

    gitlab_base_url: str = Field(default="https://gitlab.com", alias="GITLAB_URL")
    gitlab_token: SecretStr | None = Field(default=None, alias="GITLAB_TOKEN")
    gitlab_timeout_seconds: float = Field(default=30.0, alias="GITLAB_TIMEOUT_SECONDS")
    gitlab_diff_context_lines: int = Field(default=20, alias="GITLAB_DIFF_CONTEXT_LINES")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("gitlab_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def validate_gitlab_credentials(self) -> None:
        if not self.gitlab_base_url:
            raise ValueError("GITLAB_URL is required")
        if self.gitlab_token is None or not self.gitlab_token.get_secret_value():
            raise ValueError("GITLAB_TOKEN is required")
