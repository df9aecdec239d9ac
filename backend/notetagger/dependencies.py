from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends

from notetagger.config import settings
from notetagger.core.repositories.implementations.filesystem.note_repository import (
    FilesystemNoteRepository,
)
from notetagger.core.repositories.implementations.filesystem.settings_repository import (
    JsonSettingsStore,
)
from notetagger.core.services.tagging_service import ClientFactory, TaggingService
from notetagger.utils.openai_client import get_openai_client

if TYPE_CHECKING:
    from notetagger.core.repositories.note_repository import NoteRepository
    from notetagger.core.repositories.settings_repository import SettingsStore


def get_note_repository() -> NoteRepository:
    """Get a request-scoped note repository over the configured vault."""
    return FilesystemNoteRepository(settings.vault_path)


def get_settings_store() -> SettingsStore:
    """Get the tagger settings store."""
    return JsonSettingsStore(settings.tagger_settings_file)


def get_client_factory() -> ClientFactory:
    """Return the factory that builds completion clients from tagger settings."""
    return get_openai_client


def get_tagging_service(
    repo: NoteRepository = Depends(get_note_repository),
    store: SettingsStore = Depends(get_settings_store),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> TaggingService:
    """Get a request-scoped tagging service instance."""
    return TaggingService(repo, store, client_factory)
