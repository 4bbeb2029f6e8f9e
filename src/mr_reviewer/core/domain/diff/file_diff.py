from dataclasses import dataclass, field

from mr_reviewer.core.domain.diff.hunk import Hunk


@dataclass(frozen=True)
class FileDiff:
    """Parsed diff of a single file within a merge request."""

    new_path: str
    old_path: str
    diff: str = ""
    is_new: bool = False
    is_deleted: bool = False
    is_renamed: bool = False
    hunks: list[Hunk] = field(default_factory=list)
