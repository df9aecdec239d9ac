from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Query, status

from notetagger.api.v1.schemas.note import NoteRead, NoteSummary, NoteTagRequest
from notetagger.core.errors import (
    NoActiveDocumentError,
    NoTagsProducedError,
    ParseError,
    RemoteError,
)
from notetagger.core.schemas.tagging import TaggingOutcome
from notetagger.core.services.frontmatter_service import parse_front_matter
from notetagger.dependencies import get_note_repository, get_tagging_service
from notetagger.utils.logging import get_logger

if TYPE_CHECKING:
    from notetagger.core.repositories.note_repository import NoteRepository
    from notetagger.core.services.tagging_service import TaggingService

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", response_model=list[NoteSummary])
async def list_notes(
    limit: int = Query(default=50, ge=1, le=1000),
    repo: NoteRepository = Depends(get_note_repository),
):
    """List vault notes by path. Titles come from file names; no note is read."""
    notes = await repo.list(limit=limit)
    return [NoteSummary(path=n.path, title=n.title) for n in notes]


@router.get("/{path:path}", response_model=NoteRead)
async def get_note(
    path: str,
    repo: NoteRepository = Depends(get_note_repository),
):
    note = await repo.get(path)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteRead(
        path=note.path,
        title=note.title,
        text=note.text,
        front_matter=parse_front_matter(note.text),
    )


@router.post("/{path:path}/tags", response_model=TaggingOutcome)
async def tag_note(
    path: str,
    payload: NoteTagRequest | None = None,
    service: TaggingService = Depends(get_tagging_service),
):
    """Generate tags for a note and store them in its front matter.

    If `selection` is given, tags are derived from the selected text only.
    """
    selection = payload.selection if payload else None
    try:
        return await service.tag_note(path, selection=selection)
    except NoActiveDocumentError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="no active document") from err
    except NoTagsProducedError as err:
        raise HTTPException(
            status_code=422,
            detail="no tags generated",
        ) from err
    except (RemoteError, ParseError) as err:
        logger.error("Tag generation failed for %s: %s", path, err)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="failed to generate tags",
        ) from err
