from pathlib import Path

from mr_reviewer.core.application.skills.review.contracts import PromptStrategy
from mr_reviewer.infrastructure.configuration.project_prompts_loader import (
    CustomPromptReader,
    load_project_prompts,
)


class TestLoadProjectPrompts:
    def test_projects_mapping(self, tmp_path: Path) -> None:
        config = tmp_path / "projects.yaml"
        config.write_text(
            "projects:\n"
            "  acme/payments:\n"
            "    prompt_file: prompts/payments.md\n"
            "    strategy: replace\n"
            "  acme/web: /abs/web.md\n"
            "  acme/api:\n"
            "    promptStrategy: PREPEND\n"
        )

        table = load_project_prompts(config)

        assert table["acme/payments"].prompt_file == str(tmp_path / "prompts/payments.md")
        assert table["acme/payments"].strategy == PromptStrategy.REPLACE
        assert table["acme/web"].prompt_file == "/abs/web.md"
        assert table["acme/web"].strategy is None
        assert table["acme/api"].prompt_file is None
        assert table["acme/api"].strategy == PromptStrategy.PREPEND

    def test_bare_mapping_and_bad_entries(self, tmp_path: Path) -> None:
        config = tmp_path / "projects.yaml"
        config.write_text("acme/web: web.md\nbroken: 42\nodd:\n  strategy: sideways\n")

        table = load_project_prompts(config)

        assert set(table) == {"acme/web", "odd"}
        assert table["odd"].strategy is None

    def test_missing_or_invalid_file_is_empty(self, tmp_path: Path) -> None:
        assert load_project_prompts(None) == {}
        assert load_project_prompts(tmp_path / "absent.yaml") == {}
        bad = tmp_path / "bad.yaml"
        bad.write_text("projects: [unclosed\n")
        assert load_project_prompts(bad) == {}


class TestCustomPromptReader:
    def test_reads_and_strips(self, tmp_path: Path) -> None:
        prompt = tmp_path / "prompt.md"
        prompt.write_text("\n  Focus on SQL.  \n")
        assert CustomPromptReader().read(str(prompt)) == "Focus on SQL."

    def test_missing_and_empty_files_yield_empty_text(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.md"
        empty.write_text("   \n")
        reader = CustomPromptReader()
        assert reader.read(str(tmp_path / "absent.md")) == ""
        assert reader.read(str(empty)) == ""
