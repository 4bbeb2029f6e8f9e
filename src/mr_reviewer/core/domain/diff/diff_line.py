from dataclasses import dataclass
from enum import StrEnum


class DiffLineKind(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    CONTEXT = "context"


@dataclass(frozen=True)
class DiffLine:
    """One body line of a hunk, numbered in the coordinate space(s) it lives in."""

    kind: DiffLineKind
    text: str
    old_line_number: int | None = None
    new_line_number: int | None = None

    def __post_init__(self) -> None:
        has_old = self.old_line_number is not None
        has_new = self.new_line_number is not None
        expected = {
            DiffLineKind.ADD: (False, True),
            DiffLineKind.REMOVE: (True, False),
            DiffLineKind.CONTEXT: (True, True),
        }[self.kind]
        if (has_old, has_new) != expected:
            raise ValueError(
                f"{self.kind.value} line has old={self.old_line_number} new={self.new_line_number}"
            )
