"""Pure functions for building GitLab discussion bodies from feedback."""

from mr_reviewer.core.domain.quality import FeedbackItem

FOOTER = "*Powered by AI Code Reviewer*"


def format_inline_comment(item: FeedbackItem) -> str:
    """Body of an inline discussion; the position carries the location."""
    return f"**{item.severity.value}: {item.title}**\n\n{item.description}\n\n{FOOTER}"


def format_general_comment(item: FeedbackItem) -> str:
    """Body of a general discussion, naming the location in plain text."""
    return (
        f"**{item.severity.value}: {item.title}**\n\n"
        f"{_location_line(item)}"
        f"{item.description}\n\n{FOOTER}"
    )


def _location_line(item: FeedbackItem) -> str:
    if not item.file_path:
        return ""
    line = f", line {item.line_number}" if item.line_number > 0 else ""
    return f"📍 File: `{item.file_path}`{line}\n\n"
