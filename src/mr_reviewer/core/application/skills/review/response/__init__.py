from mr_reviewer.core.application.skills.review.response.review_response_parser import (
    fallback_result,
    normalize_rating,
    normalize_severity,
    parse_model_response,
)

__all__ = ["fallback_result", "normalize_rating", "normalize_severity", "parse_model_response"]
