"""Turns the MR diff listing into parsed FileDiffs and the prompt's code section."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from mr_reviewer.core.application.skills.review.diff.content_inclusion_policy import (
    ContentInclusionPolicy,
    InclusionReason,
)
from mr_reviewer.core.application.skills.review.diff.diff_parser import parse_file_diff
from mr_reviewer.core.domain.diff import FileDiff
from mr_reviewer.core.domain.merge_request import RawFileChange

logger = structlog.get_logger()


@dataclass(frozen=True)
class DiffParseResult:
    prompt_text: str
    file_diffs: list[FileDiff] = field(default_factory=list)
    included_paths: tuple[str, ...] = ()


def parse_diffs_to_hunks(
    files: Sequence[RawFileChange],
    contents_by_path: Mapping[str, str | None],
    policy: ContentInclusionPolicy | None = None,
) -> DiffParseResult:
    """Parse every file diff and render the prompt text for the code section.

    Each file contributes an optional numbered full-content block (post-change
    content, subject to *policy*) followed by its raw diff.
    """
    policy = policy or ContentInclusionPolicy()
    included: set[str] = set()
    file_diffs: list[FileDiff] = []
    sections: list[str] = []
    for change in files:
        file_diff = parse_file_diff(change)
        file_diffs.append(file_diff)
        content = contents_by_path.get(file_diff.new_path)
        after_lines = content.splitlines() if content else None
        decision = policy.decide(file_diff, after_lines, included)
        if decision.reason not in (InclusionReason.INCLUDED, InclusionReason.NO_CONTENT):
            logger.debug(
                "Full content skipped", file_path=file_diff.new_path, reason=decision.reason.value
            )
        parts = [decision.block] if decision.include else []
        parts.append(render_diff_block(file_diff.new_path, change.diff))
        sections.append("\n".join(parts))
    return DiffParseResult(
        prompt_text="\n".join(sections),
        file_diffs=file_diffs,
        included_paths=tuple(sorted(included)),
    )


def render_diff_block(path: str, diff: str) -> str:
    return f"\n=== GIT DIFF: {path} ===\n{diff}\n=== END DIFF ===\n"
