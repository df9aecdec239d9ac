from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notetagger.core.models.note import Note, NoteRef


class NoteRepository(ABC):
    """Abstract repository interface for notes.

    Contract used by services and dependency injection. Implementations
    perform I/O and therefore expose async methods.
    """

    @abstractmethod
    async def get(self, path: str) -> Note | None:  # pragma: no cover - interface only
        """Fetch a note by vault-relative path or return None if not found or unreadable."""

    @abstractmethod
    async def list(self, *, limit: int = 50) -> Sequence[NoteRef]:  # pragma: no cover
        """Return note locations ordered by path, without reading their text.

        Args:
            limit: Maximum number of notes to return
        """

    @abstractmethod
    async def write(self, path: str, text: str) -> Note:  # pragma: no cover
        """Replace the full text of an existing note and return the stored entity."""
