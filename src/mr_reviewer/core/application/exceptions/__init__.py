from mr_reviewer.core.application.exceptions.app_exceptions import (
    ApplicationError,
    SkillExecutionError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from mr_reviewer.core.application.exceptions.provider_error import ProviderError

__all__ = [
    "ApplicationError",
    "ProviderError",
    "SkillExecutionError",
    "WorkflowExecutionError",
    "WorkflowHaltedException",
]
