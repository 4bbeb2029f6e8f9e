import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from mr_reviewer.core.application.exceptions import ProviderError, SkillExecutionError
from mr_reviewer.core.application.ports import BrainPort
from mr_reviewer.core.application.skills.review.analyze_code_review_skill import (
    AnalyzeCodeReviewSkill,
)
from mr_reviewer.core.application.skills.review.prompt_templates import ReviewPromptRequest
from mr_reviewer.core.domain.quality import (
    FeedbackItem,
    FeedbackStatus,
    OverallRating,
    ReviewSeverity,
)

MODEL_OUTPUT = json.dumps(
    {
        "summary": "One issue.",
        "overallRating": "request_changes",
        "feedback": [
            {
                "filePath": "src/app.py",
                "lineNumber": 3,
                "severity": "warning",
                "title": "Null check",
                "description": "Guard against a missing session here.",
            },
            {
                "filePath": "src/app.py",
                "lineNumber": 9,
                "severity": "info",
                "title": "Tiny",
                "description": "meh",
            },
            {
                "filePath": "src/app.py",
                "lineNumber": 20,
                "severity": "error",
                "title": "Crash",
                "description": "Division by zero when the list is empty.",
            },
        ],
    }
)


def _request(**overrides) -> ReviewPromptRequest:
    data = {
        "title": "Fix session handling",
        "description": "",
        "author_name": "dev",
        "source_branch": "fix/session",
        "target_branch": "main",
        "diff_content": "=== GIT DIFF: src/app.py ===",
    }
    data.update(overrides)
    return ReviewPromptRequest(**data)


@pytest.fixture
def brain() -> AsyncMock:
    mock = AsyncMock(spec=BrainPort)
    mock.generate.return_value = MODEL_OUTPUT
    return mock


# ══════════════════════════════════════════════════════════════
#  execute
# ══════════════════════════════════════════════════════════════


class TestAnalyzeCodeReviewSkill:
    @pytest.mark.asyncio
    async def test_parses_and_curates_model_output(self, brain: AsyncMock) -> None:
        output = await AnalyzeCodeReviewSkill(brain).execute(_request())

        brain.generate.assert_awaited_once_with(output.prompt)
        assert "Fix session handling" in output.prompt
        assert output.raw_response == MODEL_OUTPUT
        assert output.result.overall_rating == OverallRating.REQUEST_CHANGES
        assert output.result.summary == "One issue."
        assert [item.title for item in output.result.feedback] == ["Crash", "Null check"]
        assert all(item.status == FeedbackStatus.PENDING for item in output.result.feedback)

    @pytest.mark.asyncio
    async def test_existing_comments_filter_duplicates(self, brain: AsyncMock) -> None:
        existing = FeedbackItem(
            id="gitlab-7",
            file_path="src/app.py",
            line_number=3,
            severity=ReviewSeverity.INFO,
            title="Comment by Reviewer",
            description="Guard against a missing session",
            status=FeedbackStatus.SUBMITTED,
            is_existing=True,
        )
        output = await AnalyzeCodeReviewSkill(brain).execute(
            _request(existing_feedback=(existing,))
        )
        assert [item.title for item in output.result.feedback] == ["Crash"]
        assert "Existing Comments" in output.prompt

    @pytest.mark.asyncio
    async def test_unparseable_output_still_returns_result(self, brain: AsyncMock) -> None:
        brain.generate.return_value = "Sorry, I cannot help with that request today."
        output = await AnalyzeCodeReviewSkill(brain).execute(_request())
        [item] = output.result.feedback
        assert item.title == "AI Review Response"

    @pytest.mark.asyncio
    async def test_provider_failure_raises_skill_error(self, brain: AsyncMock) -> None:
        brain.generate.side_effect = ProviderError(
            provider="anthropic", message="overloaded", retryable=True, status_code=529
        )
        with pytest.raises(SkillExecutionError, match="overloaded"):
            await AnalyzeCodeReviewSkill(brain).execute(_request())

    @pytest.mark.asyncio
    async def test_timeout_raises_skill_error(self) -> None:
        class SlowBrain(BrainPort):
            async def generate(self, prompt: str) -> str:
                await asyncio.sleep(5)
                return "{}"

        skill = AnalyzeCodeReviewSkill(SlowBrain(), timeout_seconds=0.01)
        with pytest.raises(SkillExecutionError, match="timed out"):
            await skill.execute(_request())
