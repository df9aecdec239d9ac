from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from notetagger.core.models.base import AppBaseModel


def _stringify_keys(value: Any) -> Any:
    # YAML allows int, bool and date keys; JSON objects only have string keys
    if isinstance(value, dict):
        return {str(key): _stringify_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(item) for item in value]
    return value


class NoteSummary(AppBaseModel):
    path: str
    title: str


class NoteRead(AppBaseModel):
    path: str
    title: str
    text: str
    front_matter: dict[str, Any] | None = Field(
        default=None,
        description="Parsed front matter, or null when the note has none",
    )

    @field_validator("front_matter", mode="before")
    @classmethod
    def stringify_front_matter_keys(cls, value: Any) -> Any:
        return _stringify_keys(value)


class NoteTagRequest(AppBaseModel):
    selection: str | None = Field(
        default=None,
        description="Optional selected text; when set, tags are derived from it alone",
    )
