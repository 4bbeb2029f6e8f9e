from mr_reviewer.core.domain.diff.diff_line import DiffLine, DiffLineKind
from mr_reviewer.core.domain.diff.file_diff import FileDiff
from mr_reviewer.core.domain.diff.hunk import Hunk
from mr_reviewer.core.domain.diff.line_mapping import LineIndex, LineMapping

__all__ = ["DiffLine", "DiffLineKind", "FileDiff", "Hunk", "LineIndex", "LineMapping"]
