from mr_reviewer.core.application.skills.review.contracts import PromptStrategy
from mr_reviewer.core.application.skills.review.prompt_templates import (
    MatchKind,
    ProjectPromptEntry,
    resolve_project_prompt,
)
from mr_reviewer.core.application.skills.review.prompt_templates.custom_prompt_resolver import (
    normalize_project_key,
)

TABLE = {
    "acme/payments": ProjectPromptEntry("payments.md", PromptStrategy.REPLACE),
    "Acme/Platform/API.git": ProjectPromptEntry("api.md"),
    "acme/platform": ProjectPromptEntry("platform.md", PromptStrategy.PREPEND),
    "tools/cli": ProjectPromptEntry(None, PromptStrategy.PREPEND),
}


# ══════════════════════════════════════════════════════════════
#  resolve_project_prompt
# ══════════════════════════════════════════════════════════════


class TestResolveProjectPrompt:
    def test_exact_match(self) -> None:
        match = resolve_project_prompt("acme/payments", TABLE)
        assert match.match_kind == MatchKind.EXACT
        assert match.prompt_file == "payments.md"
        assert match.strategy == PromptStrategy.REPLACE

    def test_normalized_match_inherits_default_strategy(self) -> None:
        match = resolve_project_prompt(
            "acme/platform/api", TABLE, default_strategy=PromptStrategy.APPEND
        )
        assert match.match_kind == MatchKind.NORMALIZED
        assert match.matched_key == "Acme/Platform/API.git"
        assert match.strategy == PromptStrategy.APPEND

    def test_substring_prefers_longest_key(self) -> None:
        match = resolve_project_prompt("acme/platform/api/v2", TABLE)
        assert match.match_kind == MatchKind.SUBSTRING
        assert match.matched_key == "Acme/Platform/API.git"

    def test_last_segment_match(self) -> None:
        match = resolve_project_prompt("other-group/cli", TABLE)
        assert match.match_kind == MatchKind.PATH_SUFFIX
        assert match.matched_key == "tools/cli"

    def test_entry_without_file_uses_global_file(self) -> None:
        match = resolve_project_prompt("tools/cli", TABLE, default_prompt_file="global.md")
        assert match.prompt_file == "global.md"
        assert match.strategy == PromptStrategy.PREPEND

    def test_falls_back_to_defaults(self) -> None:
        match = resolve_project_prompt(
            "unrelated/service", TABLE, "global.md", PromptStrategy.PREPEND
        )
        assert match.match_kind == MatchKind.DEFAULT
        assert match.prompt_file == "global.md"
        assert match.strategy == PromptStrategy.PREPEND
        assert match.matched_key is None

    def test_empty_table(self) -> None:
        assert resolve_project_prompt("acme/payments", {}).match_kind == MatchKind.DEFAULT


class TestNormalizeProjectKey:
    def test_strips_case_slashes_and_git_suffix(self) -> None:
        assert normalize_project_key(" /Group/Repo.git/ ") == "group/repo"
