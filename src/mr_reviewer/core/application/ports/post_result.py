from dataclasses import dataclass


@dataclass(frozen=True)
class Posted:
    """The host accepted the discussion."""

    discussion_id: str
    inline: bool


@dataclass(frozen=True)
class Rejected:
    """The host refused the discussion (bad position, validation error)."""

    reason: str
    status_code: int | None = None


type PostResult = Posted | Rejected
