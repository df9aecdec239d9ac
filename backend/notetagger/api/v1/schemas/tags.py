from __future__ import annotations

from pydantic import Field, field_validator

from notetagger.core.models.base import AppBaseModel


class TagGenerateRequest(AppBaseModel):
    title: str = Field(default="", max_length=255, description="Note title; may be empty")
    content: str = Field(..., description="Note text; only the first 1000 characters are sent")


class TagGenerateResponse(AppBaseModel):
    tags: list[str]


class TagMergeRequest(AppBaseModel):
    """Merge a tag list into a note's front matter without storing it."""

    text: str = Field(..., description="Full note text, front matter included")
    tags: list[str] = Field(default_factory=list, description="New tag list; empty removes tags")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip() for tag in v if tag and tag.strip()]


class TagMergeResponse(AppBaseModel):
    text: str
