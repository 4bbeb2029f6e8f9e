import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from mr_reviewer.core.application.skills.review.contracts.prompt_strategy import PromptStrategy
from mr_reviewer.core.application.skills.review.contracts.response_format import ResponseFormat
from mr_reviewer.core.application.skills.review.prompt_templates.default_instructions import (
    build_critical_recap,
    build_static_instructions,
)
from mr_reviewer.core.domain.quality import FeedbackItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewPromptRequest:
    """Everything the prompt needs to know about one merge request."""

    title: str
    description: str
    author_name: str
    source_branch: str
    target_branch: str
    diff_content: str
    existing_feedback: Sequence[FeedbackItem] = field(default_factory=tuple)
    custom_instructions: str = ""
    strategy: PromptStrategy = PromptStrategy.APPEND
    response_format: ResponseFormat = ResponseFormat.JSON
    static_instructions: str | None = None


def build_review_prompt(request: ReviewPromptRequest) -> str:
    """Assemble the review prompt.

    Section order by strategy:
      append:  static, custom, MR details, existing comments, recap
      prepend: custom, static, MR details, existing comments, recap
      replace: custom, MR details, existing comments

    Without custom instructions the strategy has nothing to act on and the
    append layout is used. Empty sections are dropped.
    """
    static = (
        request.static_instructions
        if request.static_instructions is not None
        else build_static_instructions(request.response_format)
    )
    custom = _custom_instructions_section(request.custom_instructions)
    strategy = request.strategy if custom else PromptStrategy.APPEND
    details = _merge_request_details_section(request)
    existing = _existing_feedback_section(request.existing_feedback)

    if strategy == PromptStrategy.REPLACE:
        sections = [custom, details, existing]
    elif strategy == PromptStrategy.PREPEND:
        sections = [custom, static, details, existing, build_critical_recap()]
    else:
        sections = [static, custom, details, existing, build_critical_recap()]

    prompt = "\n\n".join(section.strip("\n") for section in sections if section.strip())
    logger.debug(
        "Review prompt assembled: strategy=%s chars=%d existing=%d",
        strategy.value,
        len(prompt),
        len(request.existing_feedback),
    )
    return prompt


# ── Section Helpers ──────────────────────────────────────────────────


def _custom_instructions_section(custom_instructions: str) -> str:
    content = custom_instructions.strip()
    if not content:
        return ""
    return (
        "**🎯 PROJECT-SPECIFIC REVIEW INSTRUCTIONS:**\n\n"
        f"{content}\n\n"
        "**Note**: The above instructions are specific to this project and apply in "
        "addition to the general review guidelines."
    )


def _merge_request_details_section(request: ReviewPromptRequest) -> str:
    description = request.description.strip() or "No description provided"
    return (
        "**Merge Request Details:**\n"
        f"- Title: {request.title}\n"
        f"- Author: {request.author_name}\n"
        f"- Source Branch: {request.source_branch}\n"
        f"- Target Branch: {request.target_branch}\n"
        f"- Description: {description}\n\n"
        "**Code Changes:**\n"
        f"{request.diff_content}"
    )


def _existing_feedback_section(existing: Sequence[FeedbackItem]) -> str:
    if not existing:
        return ""
    entries = "\n".join(
        f"- {item.file_path}:{item.line_number} - {item.severity.value}: {item.title}\n"
        f"  {item.description}"
        for item in existing
    )
    return (
        "**🔍 Existing Comments:**\n"
        "The following comments have already been made on this MR:\n"
        f"{entries}\n\n"
        "🚨 **CRITICAL**: Do NOT duplicate any of these existing comments. "
        "Only provide NEW insights not covered above."
    )
