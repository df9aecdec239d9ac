from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, status

from notetagger.api.v1.schemas.tags import (  # noqa: TCH001
    TagGenerateRequest,
    TagGenerateResponse,
    TagMergeRequest,
    TagMergeResponse,
)
from notetagger.core.errors import ParseError, RemoteError
from notetagger.core.schemas.tagging import TagRequest
from notetagger.core.services.frontmatter_service import merge_tags, parse_front_matter
from notetagger.dependencies import get_tagging_service
from notetagger.utils.logging import get_logger

if TYPE_CHECKING:
    from notetagger.core.services.tagging_service import TaggingService

logger = get_logger(__name__)

router = APIRouter()


@router.post("/generate", response_model=TagGenerateResponse)
async def generate_tags_preview(
    payload: TagGenerateRequest,
    service: TaggingService = Depends(get_tagging_service),
):
    """Generate tags for a title/content pair. No note is modified."""
    try:
        tags = await service.preview_tags(TagRequest(title=payload.title, content=payload.content))
    except (RemoteError, ParseError) as err:
        logger.error("Tag generation failed: %s", err)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="failed to generate tags",
        ) from err
    return TagGenerateResponse(tags=tags)


@router.post("/merge", response_model=TagMergeResponse)
async def merge_note_tags(payload: TagMergeRequest):
    """Rewrite the `tags` field of a note's front matter and return the new text."""
    text = merge_tags(payload.text, parse_front_matter(payload.text), payload.tags)
    return TagMergeResponse(text=text)
