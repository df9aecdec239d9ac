from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from notetagger.core.errors import NoActiveDocumentError, NoTagsProducedError
from notetagger.core.schemas.tagging import TaggingOutcome, TagRequest
from notetagger.core.services.completion_service import generate_tags
from notetagger.core.services.frontmatter_service import merge_tags, parse_front_matter
from notetagger.utils.logging import get_logger
from notetagger.utils.openai_client import get_openai_client

if TYPE_CHECKING:
    from openai import AsyncOpenAI

    from notetagger.core.models.tagger_settings import TaggerSettings
    from notetagger.core.repositories.note_repository import NoteRepository
    from notetagger.core.repositories.settings_repository import SettingsStore

logger = get_logger(__name__)

ClientFactory = Callable[["TaggerSettings"], "AsyncOpenAI"]


class TaggingService:
    """Generate tags for vault notes and write them into the front matter."""

    def __init__(
        self,
        notes: NoteRepository,
        settings_store: SettingsStore,
        client_factory: ClientFactory = get_openai_client,
    ) -> None:
        self._notes = notes
        self._settings_store = settings_store
        self._client_factory = client_factory

    async def _generate(self, request: TagRequest) -> list[str]:
        config = await self._settings_store.load()
        return await generate_tags(
            request.title,
            request.content,
            config,
            client=self._client_factory(config),
        )

    async def preview_tags(self, request: TagRequest) -> list[str]:
        """Generate tags for an arbitrary title/content pair without touching any note."""
        return await self._generate(request)

    async def tag_note(self, path: str, *, selection: str | None = None) -> TaggingOutcome:
        """Run the full pipeline on one note.

        When `selection` is non-empty only that text is sent, without a title.
        The note is written at most once, after the whole tag list is known; on
        any failure it is left as it was.

        Raises:
            NoActiveDocumentError: the note does not exist
            NoTagsProducedError: the completion yielded no tags
            RemoteError, ParseError: propagated from the completion call
        """
        note = await self._notes.get(path) if path else None
        if note is None:
            raise NoActiveDocumentError(f"No note at '{path}'")

        if selection:
            request = TagRequest(title="", content=selection)
        else:
            request = TagRequest(title=note.title, content=note.text)

        tags = await self._generate(request)
        if not tags:
            logger.info("No tags generated for %s", note.path)
            raise NoTagsProducedError(f"No tags generated for '{note.path}'")

        new_text = merge_tags(note.text, parse_front_matter(note.text), tags)
        updated = new_text != note.text
        if updated:
            await self._notes.write(note.path, new_text)
        else:
            logger.info("Tags unchanged for %s, skipping write", note.path)

        return TaggingOutcome(
            path=note.path,
            tags=tags,
            updated=updated,
            message=f"tags updated: {', '.join(tags)}",
        )
