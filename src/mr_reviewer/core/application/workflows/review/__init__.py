from mr_reviewer.core.application.workflows.review.code_review_workflow import CodeReviewWorkflow
from mr_reviewer.core.application.workflows.review.review_contracts import (
    ReviewOutcome,
    ReviewPromptConfig,
    ReviewRequest,
)

__all__ = ["CodeReviewWorkflow", "ReviewOutcome", "ReviewPromptConfig", "ReviewRequest"]
