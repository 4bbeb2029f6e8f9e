"""Anchors model feedback to GitLab diff positions."""

from collections.abc import Sequence

import structlog

from mr_reviewer.core.domain.diff import FileDiff
from mr_reviewer.core.domain.merge_request import ShaTriple
from mr_reviewer.core.domain.quality import FeedbackItem, Position

logger = structlog.get_logger()


def resolve_position(
    item: FeedbackItem, file_diffs: Sequence[FileDiff], shas: ShaTriple
) -> Position | None:
    """Build the inline position for *item*, or None when it can only be a general comment.

    The item's line number is taken as a new-file line because the prompt
    numbers full content by its post-change lines; the host infers the old line.
    """
    if item.position is not None or item.line_number <= 0:
        return None
    file_diff = _find_file_diff(item.file_path, file_diffs)
    if file_diff is None:
        return None
    return Position(
        base_sha=shas.base_sha,
        start_sha=shas.start_sha,
        head_sha=shas.head_sha,
        old_path=file_diff.old_path,
        new_path=file_diff.new_path,
        new_line=item.line_number,
    )


def resolve_positions(
    items: Sequence[FeedbackItem], file_diffs: Sequence[FileDiff], shas: ShaTriple
) -> list[FeedbackItem]:
    """Attach positions in place to every item that can take one; existing items are skipped."""
    unresolved = 0
    for item in items:
        if item.is_existing or item.position is not None:
            continue
        position = resolve_position(item, file_diffs, shas)
        if position is None:
            unresolved += 1
            continue
        item.attach_position(position)
    if unresolved:
        logger.info("Feedback without inline position", count=unresolved)
    return list(items)


def _find_file_diff(path: str, file_diffs: Sequence[FileDiff]) -> FileDiff | None:
    return next((diff for diff in file_diffs if diff.new_path == path), None)
