from mr_reviewer.core.application.skills.review.prompt_templates.custom_prompt_resolver import (
    MatchKind,
    ProjectPromptEntry,
    ProjectPromptMatch,
    resolve_project_prompt,
)
from mr_reviewer.core.application.skills.review.prompt_templates.default_instructions import (
    build_critical_recap,
    build_static_instructions,
)
from mr_reviewer.core.application.skills.review.prompt_templates.review_prompt_builder import (
    ReviewPromptRequest,
    build_review_prompt,
)

__all__ = [
    "MatchKind",
    "ProjectPromptEntry",
    "ProjectPromptMatch",
    "ReviewPromptRequest",
    "build_critical_recap",
    "build_review_prompt",
    "build_static_instructions",
    "resolve_project_prompt",
]
