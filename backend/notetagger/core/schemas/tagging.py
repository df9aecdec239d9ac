from __future__ import annotations

from pydantic import Field

from notetagger.core.models.base import AppBaseModel


class TagRequest(AppBaseModel):
    """Title/content pair sent to the completion endpoint."""

    title: str = Field(default="", description="May be empty; the title line is then omitted")
    content: str = Field(default="")


class TaggingOutcome(AppBaseModel):
    """Result of running the tagging pipeline on a single note."""

    path: str
    tags: list[str] = Field(default_factory=list)
    updated: bool = Field(description="Whether the note text was rewritten")
    message: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "path": "health/dentist.md",
                    "tags": ["health", "appointment", "dentist"],
                    "updated": True,
                    "message": "tags updated: health, appointment, dentist",
                }
            ]
        }
    }
