"""Per-project custom prompt lookup.

Pure matching only; reading the prompt file and logging the outcome are
left to the caller.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from mr_reviewer.core.application.skills.review.contracts.prompt_strategy import PromptStrategy


class MatchKind(StrEnum):
    EXACT = "exact"
    NORMALIZED = "normalized"
    SUBSTRING = "substring"
    PATH_SUFFIX = "path_suffix"
    DEFAULT = "default"


@dataclass(frozen=True)
class ProjectPromptEntry:
    prompt_file: str | None = None
    strategy: PromptStrategy | None = None


@dataclass(frozen=True)
class ProjectPromptMatch:
    prompt_file: str | None
    strategy: PromptStrategy
    match_kind: MatchKind
    matched_key: str | None = None


def resolve_project_prompt(
    project: str,
    table: Mapping[str, ProjectPromptEntry],
    default_prompt_file: str | None = None,
    default_strategy: PromptStrategy = PromptStrategy.APPEND,
) -> ProjectPromptMatch:
    """Find the custom prompt configured for *project*.

    Precedence: exact key, normalized key (case, slashes, ``.git``), substring
    of the normalized path in either direction (longest key wins), then equal
    last path segment. Falls back to the global defaults. Entries without a
    strategy inherit *default_strategy*.
    """
    for kind, key in _candidates(project, table):
        if key is None:
            continue
        entry = table[key]
        return ProjectPromptMatch(
            prompt_file=entry.prompt_file or default_prompt_file,
            strategy=entry.strategy or default_strategy,
            match_kind=kind,
            matched_key=key,
        )
    return ProjectPromptMatch(
        prompt_file=default_prompt_file,
        strategy=default_strategy,
        match_kind=MatchKind.DEFAULT,
    )


def normalize_project_key(value: str) -> str:
    normalized = value.strip().lower().strip("/")
    return normalized.removesuffix(".git")


def _candidates(project: str, table: Mapping[str, ProjectPromptEntry]):
    target = normalize_project_key(project)
    keys = sorted(table, key=len, reverse=True)
    yield MatchKind.EXACT, project if project in table else None
    yield MatchKind.NORMALIZED, next(
        (key for key in keys if normalize_project_key(key) == target), None
    )
    yield MatchKind.SUBSTRING, next(
        (key for key in keys if _is_substring_match(normalize_project_key(key), target)), None
    )
    yield MatchKind.PATH_SUFFIX, next(
        (key for key in keys if _last_segment(normalize_project_key(key)) == _last_segment(target)),
        None,
    )


def _is_substring_match(key: str, target: str) -> bool:
    return bool(key and target) and (key in target or target in key)


def _last_segment(path: str) -> str:
    return path.rsplit("/", 1)[-1]
