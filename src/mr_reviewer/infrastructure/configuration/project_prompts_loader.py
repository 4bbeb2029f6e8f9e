"""Loads per-project prompt overrides and custom prompt files from disk."""

from pathlib import Path
from typing import Any

import structlog
import yaml

from mr_reviewer.core.application.skills.review.contracts import PromptStrategy
from mr_reviewer.core.application.skills.review.prompt_templates import ProjectPromptEntry

logger = structlog.get_logger()


def load_project_prompts(path: Path | None) -> dict[str, ProjectPromptEntry]:
    """Read the project -> prompt table from YAML.

    Accepts either a top-level ``projects:`` mapping or a bare mapping of
    project keys. Relative prompt files resolve against the YAML file's
    directory. A missing or unreadable file yields an empty table.
    """
    if path is None:
        return {}
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError:
        logger.warning("Project prompts file not found", file_path=str(path))
        return {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Project prompts file unreadable", file_path=str(path), error=str(exc))
        return {}
    projects = raw.get("projects", raw) if isinstance(raw, dict) else {}
    if not isinstance(projects, dict):
        logger.warning("Project prompts file has no mapping", file_path=str(path))
        return {}
    table: dict[str, ProjectPromptEntry] = {}
    for key, value in projects.items():
        entry = _parse_entry(str(key), value, path.parent)
        if entry is not None:
            table[str(key)] = entry
    logger.info("Project prompts loaded", file_path=str(path), projects=len(table))
    return table


def _parse_entry(key: str, value: Any, base_dir: Path) -> ProjectPromptEntry | None:
    if isinstance(value, str):
        value = {"prompt_file": value}
    if not isinstance(value, dict):
        logger.warning("Ignoring malformed project prompt entry", project=key)
        return None
    prompt_file = value.get("prompt_file") or value.get("promptFile")
    strategy_raw = value.get("strategy") or value.get("prompt_strategy") or value.get(
        "promptStrategy"
    )
    strategy = None
    if strategy_raw:
        try:
            strategy = PromptStrategy(str(strategy_raw).lower())
        except ValueError:
            logger.warning("Unknown prompt strategy", project=key, strategy=strategy_raw)
    if prompt_file and not Path(prompt_file).is_absolute():
        prompt_file = str(base_dir / prompt_file)
    return ProjectPromptEntry(prompt_file=prompt_file, strategy=strategy)


class CustomPromptReader:
    """Reads custom prompt files, warning instead of failing when one is unusable."""

    def read(self, prompt_file: str) -> str:
        path = Path(prompt_file)
        if not path.exists():
            logger.warning("Custom prompt file not found", file_path=prompt_file)
            return ""
        try:
            content = path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            logger.warning(
                "Failed to read custom prompt file", file_path=prompt_file, error=str(exc)
            )
            return ""
        if not content:
            logger.warning("Custom prompt file is empty", file_path=prompt_file)
            return ""
        logger.info("Using custom prompt file", file_path=prompt_file)
        return content
