from dataclasses import dataclass

from mr_reviewer.core.domain.quality.value_objects.feedback_status import FeedbackStatus
from mr_reviewer.core.domain.quality.value_objects.position import Position
from mr_reviewer.core.domain.quality.value_objects.review_severity import ReviewSeverity

_TRANSITIONS: dict[FeedbackStatus, set[FeedbackStatus]] = {
    FeedbackStatus.PENDING: {FeedbackStatus.SUBMITTING},
    FeedbackStatus.SUBMITTING: {FeedbackStatus.SUBMITTED, FeedbackStatus.ERROR},
    FeedbackStatus.SUBMITTED: set(),
    FeedbackStatus.ERROR: set(),
}


@dataclass
class FeedbackItem:
    """A single review finding, either produced by the model or read back from the MR.

    ``line_number`` is a new-file (post-change) line; 0 means not line-specific.
    """

    id: str
    file_path: str
    line_number: int
    severity: ReviewSeverity
    title: str
    description: str
    line_content: str = ""
    position: Position | None = None
    status: FeedbackStatus = FeedbackStatus.PENDING
    is_existing: bool = False
    submission_error: str | None = None

    def attach_position(self, position: Position) -> None:
        if self.position is not None:
            raise ValueError(f"Feedback item {self.id} already has a position")
        self.position = position

    def mark_submitting(self) -> None:
        self._transition(FeedbackStatus.SUBMITTING)

    def mark_submitted(self) -> None:
        self._transition(FeedbackStatus.SUBMITTED)
        self.submission_error = None

    def mark_error(self, reason: str) -> None:
        self._transition(FeedbackStatus.ERROR)
        self.submission_error = reason

    def _transition(self, target: FeedbackStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise ValueError(
                f"Illegal status transition for {self.id}: {self.status.value} -> {target.value}"
            )
        self.status = target
