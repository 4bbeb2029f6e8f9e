"""Pure functions for parsing unified diff text into hunks."""

import re

import structlog

from mr_reviewer.core.domain.diff import DiffLine, DiffLineKind, FileDiff, Hunk
from mr_reviewer.core.domain.merge_request import RawFileChange

logger = structlog.get_logger()

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def parse_hunks(diff_text: str) -> list[Hunk]:
    """Split a unified diff into hunks with per-line old/new numbering.

    Lines before the first hunk header, ``\\ No newline`` markers and empty
    lines are ignored. A malformed ``@@`` header closes the current hunk, so
    its body is dropped until the next valid header.
    """
    if not diff_text:
        return []
    hunks: list[Hunk] = []
    current: Hunk | None = None
    old_line = new_line = 0
    for raw_line in diff_text.split("\n"):
        if raw_line.startswith("@@"):
            current = _open_hunk(raw_line)
            if current is not None:
                hunks.append(current)
                old_line, new_line = current.old_start, current.new_start
            continue
        if current is None:
            continue
        if _is_file_header(raw_line) and current.is_consistent():
            current = None
            continue
        diff_line = _classify(raw_line, old_line, new_line)
        if diff_line is None:
            continue
        current.lines.append(diff_line)
        if diff_line.kind != DiffLineKind.ADD:
            old_line += 1
        if diff_line.kind != DiffLineKind.REMOVE:
            new_line += 1
    return hunks


def parse_file_diff(change: RawFileChange) -> FileDiff:
    """Parse one GitLab diff entry into a FileDiff."""
    hunks = parse_hunks(change.diff)
    inconsistent = [hunk.header for hunk in hunks if not hunk.is_consistent()]
    if inconsistent:
        logger.debug(
            "Hunk counts differ from header", file_path=change.new_path, hunks=inconsistent
        )
    return FileDiff(
        new_path=change.new_path,
        old_path=change.old_path or change.new_path,
        diff=change.diff,
        is_new=change.new_file,
        is_deleted=change.deleted_file,
        is_renamed=change.renamed_file,
        hunks=hunks,
    )


def _open_hunk(header: str) -> Hunk | None:
    match = _HUNK_HEADER_RE.match(header)
    if match is None:
        logger.debug("Skipping malformed hunk header", header=header[:80])
        return None
    old_start, old_count, new_start, new_count = match.groups()
    return Hunk(
        header=header,
        old_start=int(old_start),
        old_count=int(old_count) if old_count is not None else 1,
        new_start=int(new_start),
        new_count=int(new_count) if new_count is not None else 1,
    )


def _classify(raw_line: str, old_line: int, new_line: int) -> DiffLine | None:
    if raw_line.startswith("+"):
        return DiffLine(DiffLineKind.ADD, raw_line[1:], new_line_number=new_line)
    if raw_line.startswith("-"):
        return DiffLine(DiffLineKind.REMOVE, raw_line[1:], old_line_number=old_line)
    if raw_line.startswith(" "):
        return DiffLine(DiffLineKind.CONTEXT, raw_line[1:], old_line, new_line)
    return None


def _is_file_header(raw_line: str) -> bool:
    return raw_line.startswith("+++ ") or raw_line.startswith("--- ")
