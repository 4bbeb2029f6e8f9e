from enum import StrEnum


class ResponseFormat(StrEnum):
    """Shape the model is asked to answer in."""

    JSON = "json"
    MARKDOWN = "markdown"
