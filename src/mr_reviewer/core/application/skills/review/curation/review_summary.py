from collections.abc import Sequence

from mr_reviewer.core.domain.quality import FeedbackItem, OverallRating, ReviewSeverity

_LABELS = {
    ReviewSeverity.CRITICAL: ("critical issue", "critical issues"),
    ReviewSeverity.WARNING: ("warning", "warnings"),
    ReviewSeverity.INFO: ("info comment", "info comments"),
    ReviewSeverity.SUGGESTION: ("suggestion", "suggestions"),
}


def create_review_summary(
    feedback: Sequence[FeedbackItem], overall_rating: OverallRating | None = None
) -> str:
    """One-paragraph markdown summary with per-severity counts and the verdict."""
    if not feedback:
        return "✅ **Code looks good!** No issues found during the review."
    counts = {severity: 0 for severity in ReviewSeverity}
    for item in feedback:
        counts[item.severity] += 1
    parts = [
        f"{count} {_LABELS[severity][count > 1]}"
        for severity, count in counts.items()
        if count
    ]
    if counts[ReviewSeverity.CRITICAL]:
        icon = "❌"
    elif counts[ReviewSeverity.WARNING]:
        icon = "⚠️"
    else:
        icon = "💡"
    summary = f"{icon} **Review completed:** Found {', '.join(parts)}."
    if overall_rating == OverallRating.APPROVE:
        return f"{summary}\n\n✅ **Overall: Approved** - Issues are minor and don't block merging."
    if overall_rating == OverallRating.REQUEST_CHANGES:
        return (
            f"{summary}\n\n🔄 **Overall: Changes Requested** - "
            "Please address the critical issues before merging."
        )
    return summary
