from mr_reviewer.core.application.skills.review.contracts.prompt_strategy import PromptStrategy
from mr_reviewer.core.application.skills.review.contracts.response_format import ResponseFormat

__all__ = ["PromptStrategy", "ResponseFormat"]
