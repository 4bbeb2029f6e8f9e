from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mr_reviewer.core.application.skills.review.contracts import PromptStrategy, ResponseFormat
from mr_reviewer.core.application.skills.review.prompt_templates import ProjectPromptEntry
from mr_reviewer.core.application.skills.review.publish_feedback_skill import (
    PublishFeedbackReport,
)
from mr_reviewer.core.domain.diff import FileDiff
from mr_reviewer.core.domain.merge_request import MergeRequestDetails, ShaTriple
from mr_reviewer.core.domain.quality import FeedbackItem, ReviewResult


@dataclass(frozen=True)
class ReviewRequest:
    """Identifies the merge request to review.

    ``project`` is a numeric project id or a namespaced path such as
    ``group/sub/project``.
    """

    project: str
    mr_iid: str
    dry_run: bool = False


@dataclass
class ReviewOutcome:
    merge_request: MergeRequestDetails
    result: ReviewResult
    shas: ShaTriple | None = None
    prompt: str = ""
    file_diffs: list[FileDiff] = field(default_factory=list)
    existing_feedback: list[FeedbackItem] = field(default_factory=list)
    approvals: dict[str, Any] | None = None
    publish_report: PublishFeedbackReport | None = None
    dry_run: bool = False


@dataclass(frozen=True)
class ReviewPromptConfig:
    """Prompt options; project entries override the global file and strategy."""

    response_format: ResponseFormat = ResponseFormat.JSON
    default_prompt_file: str | None = None
    default_strategy: PromptStrategy = PromptStrategy.APPEND
    project_prompts: Mapping[str, ProjectPromptEntry] = field(default_factory=dict)
