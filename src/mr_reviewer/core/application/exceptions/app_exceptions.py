"""Application exception hierarchy.

Workflows and skills raise from this tree so callers can tell a
controlled halt from a failed review without string-matching.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application-layer errors."""

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


class WorkflowExecutionError(ApplicationError):
    """Raised when the review pipeline fails at a fatal step."""


class WorkflowHaltedException(ApplicationError):
    """Benign early exit: the workflow stopped intentionally.

    Example: the merge request carries no file changes, so there is
    nothing to send to the model.
    """


class SkillExecutionError(ApplicationError):
    """Raised when a Skill.execute() call fails (model timeout, unusable output, etc.)."""
