from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ModelFeedbackSchema(BaseModel):
    """One finding as the model wrote it; every field is optional and coerced."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file_path: str = Field(
        default="", validation_alias=AliasChoices("filePath", "file_path", "file", "path")
    )
    line_number: int = Field(
        default=0, validation_alias=AliasChoices("lineNumber", "line_number", "line")
    )
    severity: str = ""
    title: str = ""
    description: str = ""
    line_content: str = Field(
        default="", validation_alias=AliasChoices("lineContent", "line_content")
    )

    @field_validator("file_path", "severity", "title", "description", "line_content", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value).strip()

    @field_validator("line_number", mode="before")
    @classmethod
    def coerce_line(cls, value: Any) -> int:
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return 0


class ModelResponseSchema(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    summary: str = ""
    overall_rating: str = Field(
        default="", validation_alias=AliasChoices("overallRating", "overall_rating", "rating")
    )
    feedback: list[ModelFeedbackSchema] = Field(default_factory=list)

    @field_validator("summary", "overall_rating", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _as_text(value).strip()

    @field_validator("feedback", mode="before")
    @classmethod
    def keep_object_entries(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, dict)]
