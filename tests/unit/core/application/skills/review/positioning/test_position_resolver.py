from mr_reviewer.core.application.skills.review.diff import parse_file_diff
from mr_reviewer.core.application.skills.review.positioning import (
    resolve_position,
    resolve_positions,
)
from mr_reviewer.core.domain.merge_request import RawFileChange, ShaTriple
from mr_reviewer.core.domain.quality import FeedbackItem, Position, ReviewSeverity


def _item(item_id: str = "ai-1", **overrides) -> FeedbackItem:
    data = {
        "id": item_id,
        "file_path": "src/app.js",
        "line_number": 13,
        "severity": ReviewSeverity.WARNING,
        "title": "Debug output",
        "description": "console.log left in production code.",
    }
    data.update(overrides)
    return FeedbackItem(**data)


# ══════════════════════════════════════════════════════════════
#  resolve_position
# ══════════════════════════════════════════════════════════════


class TestResolvePosition:
    def test_added_line_gets_new_line_position(
        self, sample_change: RawFileChange, shas: ShaTriple
    ) -> None:
        position = resolve_position(_item(), [parse_file_diff(sample_change)], shas)

        assert position == Position(
            base_sha="base111",
            start_sha="start222",
            head_sha="head333",
            old_path="src/app.js",
            new_path="src/app.js",
            new_line=13,
        )
        assert position.is_complete()

    def test_renamed_file_keeps_both_paths(self, shas: ShaTriple) -> None:
        change = RawFileChange(
            old_path="src/old.js", new_path="src/app.js", diff="", renamed_file=True
        )
        position = resolve_position(_item(line_number=3), [parse_file_diff(change)], shas)
        assert position.old_path == "src/old.js"
        assert position.new_path == "src/app.js"

    def test_unknown_file_has_no_position(
        self, sample_change: RawFileChange, shas: ShaTriple
    ) -> None:
        item = _item(file_path="src/elsewhere.js")
        assert resolve_position(item, [parse_file_diff(sample_change)], shas) is None

    def test_general_item_has_no_position(
        self, sample_change: RawFileChange, shas: ShaTriple
    ) -> None:
        diffs = [parse_file_diff(sample_change)]
        assert resolve_position(_item(line_number=0), diffs, shas) is None


# ══════════════════════════════════════════════════════════════
#  resolve_positions
# ══════════════════════════════════════════════════════════════


class TestResolvePositions:
    def test_attaches_in_place_and_skips_existing(
        self, sample_change: RawFileChange, shas: ShaTriple
    ) -> None:
        existing_position = Position("b", "s", "h", "src/app.js", "src/app.js", new_line=11)
        existing = _item("gitlab-1", is_existing=True, position=existing_position)
        fresh = _item("ai-1")
        general = _item("ai-2", file_path="")

        diffs = [parse_file_diff(sample_change)]
        items = resolve_positions([existing, fresh, general], diffs, shas)

        assert items == [existing, fresh, general]
        assert existing.position is existing_position
        assert fresh.position is not None
        assert fresh.position.new_line == 13
        assert general.position is None
