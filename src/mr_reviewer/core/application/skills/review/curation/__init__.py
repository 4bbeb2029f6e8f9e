from mr_reviewer.core.application.skills.review.curation.feedback_curator import (
    curate_feedback,
    is_duplicate,
)
from mr_reviewer.core.application.skills.review.curation.review_summary import create_review_summary

__all__ = ["create_review_summary", "curate_feedback", "is_duplicate"]
