"""Turns raw model output into a ReviewResult without ever raising."""

import json
import logging
import re
from collections.abc import Callable, Iterator
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from mr_reviewer.core.application.skills.review.contracts.model_response_schema import (
    ModelFeedbackSchema,
    ModelResponseSchema,
)
from mr_reviewer.core.application.skills.review.contracts.response_format import ResponseFormat
from mr_reviewer.core.domain.quality import (
    FeedbackItem,
    OverallRating,
    ReviewResult,
    ReviewSeverity,
)

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "AI review completed"
DEFAULT_TITLE = "AI Review Comment"
FALLBACK_SUMMARY = "AI review completed (with parsing issues)"
FALLBACK_TITLE = "AI Review Response"

_FENCE_RE = re.compile(r"```(?:json)?\s*\n([\s\S]*?)\n?```")
_SECTION_RE = re.compile(r"^##\s+(.+?)\s*$", re.MULTILINE)
_OUTER_FENCE_RE = re.compile(r"^\s*```(?:markdown|md)?\s*$")
_ITEM_SEPARATOR_RE = re.compile(r"^\s*-{3,}\s*$", re.MULTILINE)
_BULLET_RE = re.compile(r"^\s*[-*]\s*\*\*([A-Za-z_ ]+)\*\*\s*:?\s*(.*)$")
_MAX_JSON_CANDIDATES = 20
_REVIEW_KEYS = frozenset({"feedback", "summary", "overallRating", "overall_rating", "rating"})

_SEVERITIES = {
    "critical": ReviewSeverity.CRITICAL,
    "error": ReviewSeverity.CRITICAL,
    "warning": ReviewSeverity.WARNING,
    "info": ReviewSeverity.INFO,
    "suggestion": ReviewSeverity.SUGGESTION,
}

_MARKDOWN_KEYS = {
    "file": "file_path",
    "filepath": "file_path",
    "line": "line_number",
    "linenumber": "line_number",
    "severity": "severity",
    "title": "title",
    "description": "description",
    "linecontent": "line_content",
}


class ResponseParsingError(ValueError):
    """Raised internally when a response shape cannot be recognised."""


def parse_model_response(
    raw_text: str, response_format: ResponseFormat = ResponseFormat.JSON
) -> ReviewResult:
    """Parse model output in the requested format, trying the other format second.

    When neither format yields a result, a single Info item carrying the raw
    text is returned so the reviewer still sees what the model said.
    """
    parsers: dict[ResponseFormat, Callable[[str], ModelResponseSchema]] = {
        ResponseFormat.JSON: _parse_json,
        ResponseFormat.MARKDOWN: _parse_markdown,
    }
    order = [response_format, *(fmt for fmt in parsers if fmt != response_format)]
    for fmt in order:
        try:
            schema = parsers[fmt](raw_text or "")
        except (ResponseParsingError, ValidationError) as exc:
            logger.debug("Model response is not valid %s: %s", fmt.value, exc)
            continue
        return _to_review_result(schema)
    logger.warning(
        "Failed to parse model response, using fallback. Output: %s", (raw_text or "")[:200]
    )
    return fallback_result(raw_text or "")


def fallback_result(raw_text: str) -> ReviewResult:
    item = FeedbackItem(
        id=f"ai-fallback-{uuid4().hex[:9]}",
        file_path="",
        line_number=0,
        severity=ReviewSeverity.INFO,
        title=FALLBACK_TITLE,
        description=f"Raw AI response (parsing failed):\n\n{raw_text}",
    )
    return ReviewResult(
        feedback=[item], summary=FALLBACK_SUMMARY, overall_rating=OverallRating.COMMENT
    )


def normalize_severity(value: str) -> ReviewSeverity:
    return _SEVERITIES.get(value.strip().lower(), ReviewSeverity.INFO)


def normalize_rating(value: str) -> OverallRating:
    lowered = value.strip().lower().replace(" ", "_")
    if lowered == OverallRating.APPROVE.value:
        return OverallRating.APPROVE
    if lowered == OverallRating.REQUEST_CHANGES.value:
        return OverallRating.REQUEST_CHANGES
    return OverallRating.COMMENT


# ── JSON ──────────────────────────────────────────────────────────────


def _parse_json(raw_text: str) -> ModelResponseSchema:
    for candidate in _json_candidates(raw_text):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict) and data.keys() & _REVIEW_KEYS:
            return ModelResponseSchema.model_validate(data)
    raise ResponseParsingError("No review JSON object found in model response")


def _json_candidates(raw_text: str) -> Iterator[str]:
    """Yield balanced ``{...}`` spans, fenced blocks first."""
    sources = [match.group(1) for match in _FENCE_RE.finditer(raw_text)]
    sources.append(raw_text)
    for source in sources:
        tried = 0
        start = source.find("{")
        while start != -1 and tried < _MAX_JSON_CANDIDATES:
            end = _matching_brace(source, start)
            if end is not None:
                yield source[start : end + 1]
            tried += 1
            start = source.find("{", start + 1)


def _matching_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


# ── Markdown ──────────────────────────────────────────────────────────


def _parse_markdown(raw_text: str) -> ModelResponseSchema:
    sections = _split_sections(_strip_outer_fence(raw_text))
    if not sections.keys() & {"summary", "feedback", "overall rating"}:
        raise ResponseParsingError("No review sections found in markdown response")
    items = [
        fields
        for block in _ITEM_SEPARATOR_RE.split(sections.get("feedback", ""))
        if (fields := _parse_markdown_item(block))
    ]
    return ModelResponseSchema.model_validate(
        {
            "summary": sections.get("summary", ""),
            "overall_rating": sections.get("overall rating", "").split("\n", 1)[0],
            "feedback": items,
        }
    )


def _strip_outer_fence(raw_text: str) -> str:
    lines = raw_text.strip().splitlines()
    if lines and _OUTER_FENCE_RE.match(lines[0]):
        lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines)


def _split_sections(text: str) -> dict[str, str]:
    sections: dict[str, str] = {}
    matches = list(_SECTION_RE.finditer(text))
    for position, match in enumerate(matches):
        end = matches[position + 1].start() if position + 1 < len(matches) else len(text)
        sections[match.group(1).strip().lower()] = text[match.end() : end].strip()
    return sections


def _parse_markdown_item(block: str) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    current: str | None = None
    for line in block.splitlines():
        match = _BULLET_RE.match(line)
        key = _MARKDOWN_KEYS.get(match.group(1).replace(" ", "").lower()) if match else None
        if match and key:
            current = key
            fields[key] = match.group(2).strip()
        elif current and line.strip():
            fields[current] = f"{fields[current]}\n{line.rstrip()}".strip()
    if "file_path" in fields:
        fields["file_path"] = fields["file_path"].strip("`")
    return fields


# ── Mapping ───────────────────────────────────────────────────────────


def _to_review_result(schema: ModelResponseSchema) -> ReviewResult:
    return ReviewResult(
        feedback=[_to_feedback_item(entry) for entry in schema.feedback],
        summary=schema.summary or DEFAULT_SUMMARY,
        overall_rating=normalize_rating(schema.overall_rating),
    )


def _to_feedback_item(entry: ModelFeedbackSchema) -> FeedbackItem:
    return FeedbackItem(
        id=f"ai-{uuid4().hex[:9]}",
        file_path=entry.file_path,
        line_number=max(entry.line_number, 0),
        severity=normalize_severity(entry.severity),
        title=entry.title or DEFAULT_TITLE,
        description=entry.description,
        line_content=entry.line_content,
    )
