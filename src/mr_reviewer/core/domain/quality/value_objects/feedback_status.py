from enum import StrEnum


class FeedbackStatus(StrEnum):
    PENDING = "pending"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    ERROR = "error"
