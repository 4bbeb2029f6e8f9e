from mr_reviewer.core.domain.merge_request import ShaTriple
from mr_reviewer.core.domain.quality import FeedbackStatus, ReviewSeverity
from mr_reviewer.infrastructure.tools.vcs.gitlab import convert_discussions_to_feedback

DISCUSSIONS = [
    {
        "id": "abc",
        "notes": [
            {
                "id": 101,
                "body": "Shouldn't this be awaited?",
                "system": False,
                "author": {"name": "Ada Reviewer", "username": "ada"},
                "position": {
                    "base_sha": "b1",
                    "start_sha": "s1",
                    "head_sha": "h1",
                    "old_path": "src/app.js",
                    "new_path": "src/app.js",
                    "new_line": 12,
                    "old_line": None,
                    "position_type": "text",
                },
            },
            {"id": 102, "body": "Agreed", "system": False, "author": {"username": "bob"}},
        ],
    },
    {"id": "def", "notes": [{"id": 103, "body": "added 1 commit", "system": True}]},
    {
        "id": "ghi",
        "notes": [
            {
                "id": 104,
                "body": "Removed line was fine",
                "system": False,
                "author": {"username": "bob"},
                "position": {"old_path": "src/app.js", "new_path": "src/app.js", "old_line": 4},
            }
        ],
    },
]


class TestConvertDiscussionsToFeedback:
    def test_keeps_positioned_human_notes(self) -> None:
        items = convert_discussions_to_feedback(DISCUSSIONS)

        assert [item.id for item in items] == ["gitlab-101", "gitlab-104"]
        first = items[0]
        assert first.title == "Comment by Ada Reviewer"
        assert first.file_path == "src/app.js"
        assert first.line_number == 12
        assert first.severity == ReviewSeverity.INFO
        assert first.status == FeedbackStatus.SUBMITTED
        assert first.is_existing
        assert first.position.head_sha == "h1"

    def test_old_side_note_has_line_zero_and_username_title(self) -> None:
        item = convert_discussions_to_feedback(DISCUSSIONS)[1]
        assert item.line_number == 0
        assert item.title == "Comment by bob"
        assert item.position.old_line == 4
        assert item.position.new_line is None

    def test_missing_shas_fall_back_to_latest_version(self) -> None:
        shas = ShaTriple(base_sha="B", start_sha="S", head_sha="H")
        items = convert_discussions_to_feedback(DISCUSSIONS, shas)
        assert items[0].position.base_sha == "b1"
        assert (items[1].position.base_sha, items[1].position.head_sha) == ("B", "H")

    def test_empty_input(self) -> None:
        assert convert_discussions_to_feedback([]) == []
