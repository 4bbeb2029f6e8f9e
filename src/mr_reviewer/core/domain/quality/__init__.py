from mr_reviewer.core.domain.quality.feedback_item import FeedbackItem
from mr_reviewer.core.domain.quality.review_result import ReviewResult
from mr_reviewer.core.domain.quality.value_objects.feedback_status import FeedbackStatus
from mr_reviewer.core.domain.quality.value_objects.overall_rating import OverallRating
from mr_reviewer.core.domain.quality.value_objects.position import Position
from mr_reviewer.core.domain.quality.value_objects.review_severity import ReviewSeverity

__all__ = [
    "FeedbackItem",
    "FeedbackStatus",
    "OverallRating",
    "Position",
    "ReviewResult",
    "ReviewSeverity",
]
