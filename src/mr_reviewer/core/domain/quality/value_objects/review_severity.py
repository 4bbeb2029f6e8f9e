from enum import StrEnum


class ReviewSeverity(StrEnum):
    CRITICAL = "Critical"
    WARNING = "Warning"
    INFO = "Info"
    SUGGESTION = "Suggestion"

    @property
    def rank(self) -> int:
        """Sort key: lower ranks are more severe."""
        return _RANKS[self]


_RANKS = {
    ReviewSeverity.CRITICAL: 0,
    ReviewSeverity.WARNING: 1,
    ReviewSeverity.INFO: 2,
    ReviewSeverity.SUGGESTION: 3,
}
