from mr_reviewer.core.application.skills.review.diff.content_inclusion_policy import (
    ContentInclusionPolicy,
    InclusionDecision,
    InclusionReason,
)
from mr_reviewer.core.application.skills.review.diff.diff_parser import parse_file_diff, parse_hunks
from mr_reviewer.core.application.skills.review.diff.diff_prompt_renderer import (
    DiffParseResult,
    parse_diffs_to_hunks,
)
from mr_reviewer.core.application.skills.review.diff.file_patterns import is_non_meaningful_file
from mr_reviewer.core.application.skills.review.diff.line_mapper import (
    build_complete_line_mapping,
    build_line_mapping,
    new_line_for,
    old_line_for,
)

__all__ = [
    "ContentInclusionPolicy",
    "DiffParseResult",
    "InclusionDecision",
    "InclusionReason",
    "build_complete_line_mapping",
    "build_line_mapping",
    "is_non_meaningful_file",
    "new_line_for",
    "old_line_for",
    "parse_diffs_to_hunks",
    "parse_file_diff",
    "parse_hunks",
]
