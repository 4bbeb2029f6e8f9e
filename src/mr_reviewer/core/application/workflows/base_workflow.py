from abc import ABC, abstractmethod

from mr_reviewer.core.application.workflows.review.review_contracts import (
    ReviewOutcome,
    ReviewRequest,
)


class BaseWorkflow(ABC):
    """Abstract base for deterministic review pipelines."""

    @abstractmethod
    async def execute(self, request: ReviewRequest) -> ReviewOutcome:
        """Run the full workflow pipeline for the given merge request."""
