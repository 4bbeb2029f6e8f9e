"""structlog setup shared by every entry point.

``configure_logging`` installs one processor chain used by structlog loggers
and, through ``ProcessorFormatter``, by stdlib ``logging`` loggers (httpx and
the pure parsing modules log that way). JSON output nests review, processing
and error fields via ``review_schema_processor``. Every event is scrubbed by
``redaction_processor`` before rendering.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

from mr_reviewer.infrastructure.observability.logging.review_schema_processor import (
    review_schema_processor,
)
from mr_reviewer.infrastructure.observability.redaction_service import redaction_processor

_JSON_ENVIRONMENTS = frozenset({"qa", "staging", "prod", "production"})
_CONFIGURED = False


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and the stdlib bridge once per process.

    ``json_output`` defaults to LOG_FORMAT (json|console), then APP_ENV.
    ``level`` defaults to LOG_LEVEL, then INFO.
    """
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return
    _CONFIGURED = True

    use_json = _wants_json() if json_output is None else json_output
    pre_chain = _shared_processors(use_json)
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[*pre_chain, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _install_stdlib_handler(pre_chain, renderer, level or os.environ.get("LOG_LEVEL", "INFO"))


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Logger pre-bound with ``context_component`` (rendered as ``component``)."""
    return structlog.get_logger().bind(context_component=component)


def _wants_json() -> bool:
    log_format = os.environ.get("LOG_FORMAT", "").lower()
    if log_format in ("json", "console"):
        return log_format == "json"
    return os.environ.get("APP_ENV", "local").lower() in _JSON_ENVIRONMENTS


def _shared_processors(use_json: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redaction_processor,
    ]
    if use_json:
        processors.append(review_schema_processor)
    return processors


def _install_stdlib_handler(pre_chain: list[Any], renderer: Any, level: str) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    logging.getLogger("httpx").setLevel(logging.WARNING)
