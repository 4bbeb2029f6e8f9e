"""Structlog processor giving every JSON log line the same nested shape.

Flat keyword fields are folded into blocks by name (``review``,
``processing``, ``error``); ``context_component`` becomes ``component`` and
whatever is left lands in ``extra``. A block appears only when its trigger
field was logged.
"""

from __future__ import annotations

import os
from typing import Any

_REVIEW_KEYS = ("project", "project_id", "mr_iid", "event_type")

# block name -> (trigger field, {block key: (source field, default)})
_BLOCKS: dict[str, tuple[str, dict[str, tuple[str, Any]]]] = {
    "processing": (
        "processing_status",
        {"status": ("processing_status", None), "duration_ms": ("processing_duration_ms", None)},
    ),
    "error": (
        "error_type",
        {
            "type": ("error_type", None),
            "details": ("error_details", None),
            "retryable": ("error_retryable", False),
        },
    ),
}


def review_schema_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    fields = dict(event_dict)
    shaped: dict[str, Any] = {
        "timestamp": fields.pop("timestamp", None),
        "level": fields.pop("level", method_name),
        "service": os.environ.get("SERVICE_NAME", "mr-reviewer"),
        "environment": os.environ.get("APP_ENV", "local"),
        "message": fields.pop("event", ""),
    }

    component = fields.pop("context_component", None)
    if component is not None:
        shaped["component"] = component

    review = {key: fields.pop(key) for key in _REVIEW_KEYS if key in fields}
    if review:
        shaped["review"] = review

    for block, (trigger, layout) in _BLOCKS.items():
        if fields.get(trigger) is None:
            continue
        shaped[block] = {
            key: fields.pop(source, default) for key, (source, default) in layout.items()
        }

    if fields:
        shaped["extra"] = fields
    return shaped
