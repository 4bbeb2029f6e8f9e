from mr_reviewer.infrastructure.observability.logger_factory_service import (
    configure_logging,
    get_logger,
)
from mr_reviewer.infrastructure.observability.redaction_service import redact_text

__all__ = ["configure_logging", "get_logger", "redact_text"]
