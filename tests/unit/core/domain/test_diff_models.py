import pytest

from mr_reviewer.core.domain.diff import DiffLine, DiffLineKind, Hunk, LineIndex, LineMapping

# ══════════════════════════════════════════════════════════════
#  DiffLine
# ══════════════════════════════════════════════════════════════


class TestDiffLine:
    def test_context_line_carries_both_numbers(self) -> None:
        line = DiffLine(DiffLineKind.CONTEXT, "x", old_line_number=3, new_line_number=4)
        assert (line.old_line_number, line.new_line_number) == (3, 4)

    def test_added_line_rejects_old_number(self) -> None:
        with pytest.raises(ValueError):
            DiffLine(DiffLineKind.ADD, "x", old_line_number=3, new_line_number=4)

    def test_removed_line_requires_old_number(self) -> None:
        with pytest.raises(ValueError):
            DiffLine(DiffLineKind.REMOVE, "x")


# ══════════════════════════════════════════════════════════════
#  Hunk
# ══════════════════════════════════════════════════════════════


class TestHunk:
    def test_end_lines_follow_header_counts(self) -> None:
        hunk = Hunk(
            header="@@ -10,6 +10,7 @@", old_start=10, old_count=6, new_start=10, new_count=7
        )
        assert hunk.old_end == 16
        assert hunk.new_end == 17

    def test_zero_count_range_starts_after_named_line(self) -> None:
        hunk = Hunk(header="@@ -5,0 +6,2 @@", old_start=5, old_count=0, new_start=6, new_count=2)
        assert hunk.old_first == 6
        assert hunk.old_end == 6
        assert hunk.new_first == 6

    def test_consistency_counts_body_lines(self) -> None:
        hunk = Hunk(header="@@ -1,2 +1,2 @@", old_start=1, old_count=2, new_start=1, new_count=2)
        hunk.lines.append(DiffLine(DiffLineKind.CONTEXT, "a", 1, 1))
        assert not hunk.is_consistent()
        hunk.lines.append(DiffLine(DiffLineKind.REMOVE, "b", old_line_number=2))
        hunk.lines.append(DiffLine(DiffLineKind.ADD, "c", new_line_number=2))
        assert hunk.is_consistent()


# ══════════════════════════════════════════════════════════════
#  LineIndex / LineMapping
# ══════════════════════════════════════════════════════════════


class TestLineIndex:
    @pytest.mark.parametrize("size", [None, 5])
    def test_behaves_like_a_mapping(self, size) -> None:
        index = LineIndex(size)
        index.set(2, 7)
        index.set(4, 9)
        assert index[2] == 7
        assert index.get(3) is None
        assert list(index) == [2, 4]
        assert len(index) == 2
        with pytest.raises(KeyError):
            index[3]

    def test_dense_index_grows_past_declared_size(self) -> None:
        index = LineIndex(2)
        index.set(6, 1)
        assert index.is_dense
        assert index[6] == 1

    def test_non_positive_lines_are_ignored(self) -> None:
        index = LineIndex()
        index.set(0, 1)
        index.set(-3, 1)
        assert len(index) == 0


class TestLineMapping:
    def test_pair_records_both_directions(self) -> None:
        mapping = LineMapping.sparse()
        mapping.pair(15, 10)
        assert mapping.old_line_for(10) == 15
        assert mapping.new_line_for(15) == 10
        assert mapping.old_line_for(999) is None
        assert mapping.new_line_for(999) is None

    def test_dense_mapping_uses_dense_indexes(self) -> None:
        mapping = LineMapping.dense(3, 4)
        assert mapping.new_to_old.is_dense
        assert mapping.old_to_new.is_dense
