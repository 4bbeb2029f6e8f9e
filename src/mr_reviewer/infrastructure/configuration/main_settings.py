from mr_reviewer.infrastructure.configuration.gitlab_settings import GitLabSettings
from mr_reviewer.infrastructure.configuration.llm_settings import LlmSettings
from mr_reviewer.infrastructure.configuration.review_settings import ReviewSettings


class Settings(GitLabSettings, LlmSettings, ReviewSettings):
    """
    Combines all settings.
    Inherits from GitLabSettings, LlmSettings and ReviewSettings.
    """

    app_name: str = "MR Reviewer"
