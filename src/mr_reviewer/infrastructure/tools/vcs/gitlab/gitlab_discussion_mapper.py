from typing import Any

import structlog

from mr_reviewer.core.domain.merge_request import ShaTriple
from mr_reviewer.core.domain.quality import (
    FeedbackItem,
    FeedbackStatus,
    Position,
    ReviewSeverity,
)

logger = structlog.get_logger()

_EMPTY_SHAS = ShaTriple(base_sha="", start_sha="", head_sha="")


def convert_discussions_to_feedback(
    discussions: list[dict[str, Any]], shas: ShaTriple | None = None
) -> list[FeedbackItem]:
    """Convert GitLab MR discussions into existing feedback items.

    Only non-system notes anchored to a diff position are kept. A note's own
    SHAs win; *shas* fills whichever the note does not carry.
    """
    items: list[FeedbackItem] = []
    for discussion in discussions:
        for note in discussion.get("notes") or []:
            item = _note_to_feedback(note, shas or _EMPTY_SHAS)
            if item is not None:
                items.append(item)
    logger.debug("Existing inline comments loaded", discussions=len(discussions), items=len(items))
    return items


def _note_to_feedback(note: dict[str, Any], shas: ShaTriple) -> FeedbackItem | None:
    if note.get("system"):
        return None
    position = note.get("position")
    if not isinstance(position, dict):
        return None

    author = note.get("author") or {}
    author_name = author.get("name") or author.get("username") or "unknown"
    new_path = position.get("new_path") or position.get("old_path") or ""

    return FeedbackItem(
        id=f"gitlab-{note.get('id')}",
        file_path=new_path,
        line_number=position.get("new_line") or 0,
        severity=ReviewSeverity.INFO,
        title=f"Comment by {author_name}",
        description=note.get("body") or "",
        position=Position(
            base_sha=position.get("base_sha") or shas.base_sha,
            start_sha=position.get("start_sha") or shas.start_sha,
            head_sha=position.get("head_sha") or shas.head_sha,
            old_path=position.get("old_path") or new_path,
            new_path=new_path,
            new_line=position.get("new_line"),
            old_line=position.get("old_line"),
            position_type=position.get("position_type") or "text",
        ),
        status=FeedbackStatus.SUBMITTED,
        is_existing=True,
    )
