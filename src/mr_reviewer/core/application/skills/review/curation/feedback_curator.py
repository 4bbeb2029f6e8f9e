"""Filtering, deduplication and ordering of model feedback."""

from collections.abc import Sequence

import structlog

from mr_reviewer.core.domain.quality import FeedbackItem

logger = structlog.get_logger()

DEFAULT_MIN_DESCRIPTION_LENGTH = 10


def curate_feedback(
    new_items: Sequence[FeedbackItem],
    existing_items: Sequence[FeedbackItem] = (),
    min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
) -> list[FeedbackItem]:
    """Drop low-value and duplicate items, then order by severity, path and line."""
    kept: list[FeedbackItem] = []
    too_short = duplicates = 0
    for item in new_items:
        if len(item.description.strip()) < min_description_length:
            too_short += 1
            continue
        if any(is_duplicate(item, existing) for existing in existing_items):
            duplicates += 1
            continue
        kept.append(item)
    if too_short or duplicates:
        logger.info(
            "Feedback curated",
            kept=len(kept),
            dropped_short=too_short,
            dropped_duplicates=duplicates,
        )
    return sorted(kept, key=_sort_key)


def is_duplicate(item: FeedbackItem, existing: FeedbackItem) -> bool:
    """Same location and overlapping title or description, case-insensitively."""
    if item.file_path != existing.file_path or item.line_number != existing.line_number:
        return False
    return _overlaps(item.title, existing.title) or _overlaps(
        item.description, existing.description
    )


def _overlaps(left: str, right: str) -> bool:
    left, right = left.lower(), right.lower()
    return left in right or right in left


def _sort_key(item: FeedbackItem) -> tuple[int, str, int]:
    return item.severity.rank, item.file_path, item.line_number
