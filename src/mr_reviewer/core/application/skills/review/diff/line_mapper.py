"""Old/new line correspondence built from parsed hunks."""

from mr_reviewer.core.domain.diff import DiffLineKind, FileDiff, LineMapping


def build_line_mapping(file_diff: FileDiff) -> LineMapping:
    """Map only the context lines that appear inside the diff's hunks."""
    mapping = LineMapping.sparse()
    for hunk in file_diff.hunks:
        for line in hunk.lines:
            if line.kind == DiffLineKind.CONTEXT:
                mapping.pair(line.old_line_number, line.new_line_number)
    return mapping


def build_complete_line_mapping(
    file_diff: FileDiff,
    new_total_lines: int | None = None,
    old_total_lines: int | None = None,
) -> LineMapping:
    """Map every unchanged line of the file, including those outside any hunk.

    Unchanged regions before, between and after hunks advance in lockstep
    on both sides. When only one total is known the other is inferred from
    the offset left by the last hunk; when neither is known the mapping
    stops at the last line the hunks describe.
    """
    hunks = file_diff.hunks
    trailing_offset = (hunks[-1].new_end - hunks[-1].old_end) if hunks else 0
    if new_total_lines is None and old_total_lines is not None:
        new_total_lines = old_total_lines + trailing_offset
    elif old_total_lines is None and new_total_lines is not None:
        old_total_lines = new_total_lines - trailing_offset

    if new_total_lines is not None and old_total_lines is not None:
        mapping = LineMapping.dense(new_total_lines, old_total_lines)
    else:
        mapping = LineMapping.sparse()

    old_line = new_line = 1
    for hunk in hunks:
        old_line, new_line = _fill_lockstep(
            mapping, old_line, new_line, hunk.old_first, hunk.new_first
        )
        for line in hunk.lines:
            if line.kind == DiffLineKind.CONTEXT:
                mapping.pair(line.old_line_number, line.new_line_number)
        old_line, new_line = hunk.old_end, hunk.new_end

    if new_total_lines is not None and old_total_lines is not None:
        _fill_lockstep(mapping, old_line, new_line, old_total_lines + 1, new_total_lines + 1)
    return mapping


def old_line_for(new_line: int, mapping: LineMapping) -> int | None:
    return mapping.old_line_for(new_line)


def new_line_for(old_line: int, mapping: LineMapping) -> int | None:
    return mapping.new_line_for(old_line)


def _fill_lockstep(
    mapping: LineMapping, old_line: int, new_line: int, old_stop: int, new_stop: int
) -> tuple[int, int]:
    while old_line < old_stop and new_line < new_stop:
        mapping.pair(old_line, new_line)
        old_line += 1
        new_line += 1
    return old_line, new_line
