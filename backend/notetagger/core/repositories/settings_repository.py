from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notetagger.core.models.tagger_settings import TaggerSettings


class SettingsStore(ABC):
    """Persistence for the user's tagger configuration."""

    @abstractmethod
    async def load(self) -> TaggerSettings:  # pragma: no cover - interface only
        """Return stored settings overlaid on the defaults."""

    @abstractmethod
    async def save(self, tagger_settings: TaggerSettings) -> None:  # pragma: no cover
        """Persist `tagger_settings`, replacing whatever was stored."""
