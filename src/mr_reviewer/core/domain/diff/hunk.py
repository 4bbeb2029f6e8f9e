from dataclasses import dataclass, field

from mr_reviewer.core.domain.diff.diff_line import DiffLine, DiffLineKind


@dataclass
class Hunk:
    """A contiguous diff region opened by an ``@@ -a,b +c,d @@`` header."""

    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def old_first(self) -> int:
        """First old-file line covered by or following this hunk.

        A zero count means the range is empty and ``old_start`` names the
        line *before* it, as in ``@@ -5,0 +6,2 @@``.
        """
        return self.old_start if self.old_count else self.old_start + 1

    @property
    def new_first(self) -> int:
        return self.new_start if self.new_count else self.new_start + 1

    @property
    def old_end(self) -> int:
        """First old-file line after this hunk."""
        return self.old_first + self.old_count

    @property
    def new_end(self) -> int:
        """First new-file line after this hunk."""
        return self.new_first + self.new_count

    def is_consistent(self) -> bool:
        """True when the body line counts match the header counts."""
        old_seen = sum(1 for line in self.lines if line.kind != DiffLineKind.ADD)
        new_seen = sum(1 for line in self.lines if line.kind != DiffLineKind.REMOVE)
        return old_seen == self.old_count and new_seen == self.new_count
