from mr_reviewer.core.application.skills.review.positioning.position_resolver import (
    resolve_position,
    resolve_positions,
)

__all__ = ["resolve_position", "resolve_positions"]
