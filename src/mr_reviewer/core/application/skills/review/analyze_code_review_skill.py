import asyncio
import logging
from dataclasses import dataclass

from mr_reviewer.core.application.exceptions import ProviderError, SkillExecutionError
from mr_reviewer.core.application.ports import BrainPort
from mr_reviewer.core.application.skills.review.curation import curate_feedback
from mr_reviewer.core.application.skills.review.prompt_templates import (
    ReviewPromptRequest,
    build_review_prompt,
)
from mr_reviewer.core.application.skills.review.response import parse_model_response
from mr_reviewer.core.application.skills.skill import BaseSkill
from mr_reviewer.core.domain.quality import ReviewResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyzeCodeReviewOutput:
    prompt: str
    result: ReviewResult
    raw_response: str


class AnalyzeCodeReviewSkill(BaseSkill[ReviewPromptRequest, AnalyzeCodeReviewOutput]):
    """Builds the review prompt, calls the model and curates what comes back.

    The model call is bounded by ``timeout_seconds``. Output that cannot be
    parsed still yields a result (a single fallback item); only a model
    failure or timeout raises.
    """

    def __init__(
        self,
        brain: BrainPort,
        timeout_seconds: float | None = None,
        min_description_length: int = 10,
    ) -> None:
        self._brain = brain
        self._timeout_seconds = timeout_seconds
        self._min_description_length = min_description_length

    async def execute(self, input_data: ReviewPromptRequest) -> AnalyzeCodeReviewOutput:
        logger.info("[AnalyzeCodeReview] Building prompt and calling model")
        ctx = {"skill": "analyze_code_review", "timeout_seconds": self._timeout_seconds}
        prompt = build_review_prompt(input_data)
        try:
            raw = await asyncio.wait_for(self._brain.generate(prompt), self._timeout_seconds)
        except TimeoutError as exc:
            raise SkillExecutionError(
                f"Model call timed out after {self._timeout_seconds}s", context=ctx
            ) from exc
        except ProviderError as exc:
            raise SkillExecutionError(f"Model call failed: {exc}", context=ctx) from exc

        parsed = parse_model_response(raw, input_data.response_format)
        curated = curate_feedback(
            parsed.feedback, input_data.existing_feedback, self._min_description_length
        )
        logger.info(
            "[AnalyzeCodeReview] Rating: %s, %d/%d items kept",
            parsed.overall_rating.value,
            len(curated),
            len(parsed.feedback),
        )
        result = ReviewResult(
            feedback=curated, summary=parsed.summary, overall_rating=parsed.overall_rating
        )
        return AnalyzeCodeReviewOutput(prompt=prompt, result=result, raw_response=raw)
