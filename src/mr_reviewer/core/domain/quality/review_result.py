from dataclasses import dataclass, field

from mr_reviewer.core.domain.quality.feedback_item import FeedbackItem
from mr_reviewer.core.domain.quality.value_objects.overall_rating import OverallRating
from mr_reviewer.core.domain.quality.value_objects.review_severity import ReviewSeverity


@dataclass
class ReviewResult:
    feedback: list[FeedbackItem] = field(default_factory=list)
    summary: str = ""
    overall_rating: OverallRating = OverallRating.COMMENT

    def count_by_severity(self) -> dict[ReviewSeverity, int]:
        counts = {severity: 0 for severity in ReviewSeverity}
        for item in self.feedback:
            counts[item.severity] += 1
        return counts
