from __future__ import annotations

from pydantic import Field

from .base import AppBaseModel


class NoteRef(AppBaseModel):
    """Location of a note in the vault, known without reading the file."""

    path: str = Field(description="Vault-relative POSIX path, e.g. 'projects/plan.md'")
    title: str = Field(description="File basename without extension")


class Note(NoteRef):
    """Markdown note snapshot read from the vault."""

    text: str = Field(description="Full raw text, front matter included")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "path": "health/dentist.md",
                    "title": "dentist",
                    "text": "---\ncreated: 2024-05-01\n---\nDentist appointment on Monday at 10:00 AM.\n",
                }
            ]
        }
    }
