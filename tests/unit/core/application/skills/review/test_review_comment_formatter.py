from mr_reviewer.core.application.skills.review.review_comment_formatter import (
    format_general_comment,
    format_inline_comment,
)
from mr_reviewer.core.domain.quality import FeedbackItem, ReviewSeverity


def _item(**overrides) -> FeedbackItem:
    data = {
        "id": "ai-1",
        "file_path": "src/db.py",
        "line_number": 27,
        "severity": ReviewSeverity.CRITICAL,
        "title": "SQL injection",
        "description": "Use bound parameters instead of f-strings.",
    }
    data.update(overrides)
    return FeedbackItem(**data)


class TestFormatComments:
    def test_inline_body(self) -> None:
        assert format_inline_comment(_item()) == (
            "**Critical: SQL injection**\n\n"
            "Use bound parameters instead of f-strings.\n\n"
            "*Powered by AI Code Reviewer*"
        )

    def test_general_body_names_location(self) -> None:
        body = format_general_comment(_item())
        assert "📍 File: `src/db.py`, line 27\n\n" in body
        assert body.startswith("**Critical: SQL injection**")

    def test_general_body_without_line(self) -> None:
        body = format_general_comment(_item(line_number=0))
        assert "📍 File: `src/db.py`\n\n" in body

    def test_general_body_without_file(self) -> None:
        assert "📍" not in format_general_comment(_item(file_path=""))
