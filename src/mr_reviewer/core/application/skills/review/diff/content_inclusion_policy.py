from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from mr_reviewer.core.application.skills.review.diff.file_patterns import is_non_meaningful_file
from mr_reviewer.core.domain.diff import FileDiff

DEFAULT_MAX_FULL_CONTENT_LINES = 10_000


class InclusionReason(StrEnum):
    INCLUDED = "included"
    DELETED = "deleted"
    NO_CONTENT = "no_content"
    TOO_LARGE = "too_large"
    NON_MEANINGFUL = "non_meaningful"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class InclusionDecision:
    include: bool
    reason: InclusionReason
    block: str = ""


class ContentInclusionPolicy:
    """Decides whether a file's full post-change content is embedded in the prompt.

    Rules are checked in order: deleted files, missing content, oversized
    files, non-meaningful paths, then paths already embedded in this prompt.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_FULL_CONTENT_LINES) -> None:
        self._max_lines = max_lines

    def decide(
        self,
        file_diff: FileDiff,
        after_lines: Sequence[str] | None,
        already_included: set[str],
    ) -> InclusionDecision:
        """Return the decision and, when included, record the path in *already_included*."""
        reason = self._rejection_reason(file_diff, after_lines, already_included)
        if reason is not None:
            return InclusionDecision(include=False, reason=reason)
        already_included.add(file_diff.new_path)
        return InclusionDecision(
            include=True,
            reason=InclusionReason.INCLUDED,
            block=render_full_content_block(file_diff.new_path, after_lines or ()),
        )

    def _rejection_reason(
        self,
        file_diff: FileDiff,
        after_lines: Sequence[str] | None,
        already_included: set[str],
    ) -> InclusionReason | None:
        if file_diff.is_deleted:
            return InclusionReason.DELETED
        if not after_lines:
            return InclusionReason.NO_CONTENT
        if len(after_lines) > self._max_lines:
            return InclusionReason.TOO_LARGE
        if is_non_meaningful_file(file_diff.new_path):
            return InclusionReason.NON_MEANINGFUL
        if file_diff.new_path in already_included:
            return InclusionReason.DUPLICATE
        return None


def render_full_content_block(path: str, lines: Sequence[str]) -> str:
    numbered = "\n".join(f"{number:>4}: {line}" for number, line in enumerate(lines, start=1))
    return f"\n=== FULL FILE CONTENT: {path} ===\n{numbered}\n=== END FILE CONTENT ===\n"
