"""Scrubs GitLab and model provider credentials from text, mappings and log events."""

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "[REDACTED]"

# group 1 is kept, group 2 is the secret
_SECRET_RES = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(bearer\s+)([\w\-.~+/=]+)",
        r"(private-token:\s*)([\w\-.~+/=]+)",
        r"(authorization:\s*)([\w\-.~+/=]+)",
        r"([?&]private_token=)([^&\s]+)",
        r"(\b)(glpat-[\w\-]{8,})",
        r"(\b)(sk-(?:ant-)?[\w\-]{8,})",
    )
]

_SENSITIVE_KEY_MARKERS = ("authorization", "private_token", "api_key", "password", "secret")
_SENSITIVE_KEYS = frozenset({"token", "access_token", "gitlab_token"})


def redact_text(text: str) -> str:
    """Replace every recognised secret in *text* with ``[REDACTED]``."""
    if not text:
        return text
    for secret_re in _SECRET_RES:
        text = secret_re.sub(rf"\1{REDACTED}", text)
    return text


def is_sensitive_key(key: Any) -> bool:
    normalized = str(key).lower().replace("-", "_")
    return normalized in _SENSITIVE_KEYS or any(
        marker in normalized for marker in _SENSITIVE_KEY_MARKERS
    )


def redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, Mapping):
        return redact_dict(value)
    if isinstance(value, list):
        return [redact_value(item) for item in value]
    if isinstance(value, tuple):
        return tuple(redact_value(item) for item in value)
    return value


def redact_dict(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of *obj* with sensitive keys masked and string values scrubbed, recursively."""
    return {
        key: REDACTED if is_sensitive_key(key) else redact_value(value)
        for key, value in obj.items()
    }


def redaction_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor applying ``redact_dict`` to every event."""
    return redact_dict(event_dict)
