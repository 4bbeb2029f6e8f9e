from mr_reviewer.infrastructure.tools.vcs.gitlab.gitlab_discussion_mapper import (
    convert_discussions_to_feedback,
)
from mr_reviewer.infrastructure.tools.vcs.gitlab.gitlab_http_client import GitLabHttpClient
from mr_reviewer.infrastructure.tools.vcs.gitlab.gitlab_mr_client import GitLabMergeRequestClient
from mr_reviewer.infrastructure.tools.vcs.gitlab.gitlab_url_parser import parse_mr_url

__all__ = [
    "GitLabHttpClient",
    "GitLabMergeRequestClient",
    "convert_discussions_to_feedback",
    "parse_mr_url",
]
