from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Position:
    """GitLab text position anchoring a discussion to a diff line."""

    base_sha: str
    start_sha: str
    head_sha: str
    old_path: str
    new_path: str
    new_line: int | None = None
    old_line: int | None = None
    position_type: str = "text"

    def is_complete(self) -> bool:
        """True when GitLab would accept this as an inline position."""
        has_shas = bool(self.base_sha and self.start_sha and self.head_sha)
        has_paths = bool(self.old_path and self.new_path)
        return has_shas and has_paths and (self.new_line is not None or self.old_line is not None)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "position_type": self.position_type,
            "base_sha": self.base_sha,
            "start_sha": self.start_sha,
            "head_sha": self.head_sha,
            "old_path": self.old_path,
            "new_path": self.new_path,
        }
        if self.new_line is not None:
            payload["new_line"] = self.new_line
        if self.old_line is not None:
            payload["old_line"] = self.old_line
        return payload
