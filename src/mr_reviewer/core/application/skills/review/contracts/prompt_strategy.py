from enum import StrEnum


class PromptStrategy(StrEnum):
    """How project-specific instructions combine with the static ones."""

    APPEND = "append"
    PREPEND = "prepend"
    REPLACE = "replace"
