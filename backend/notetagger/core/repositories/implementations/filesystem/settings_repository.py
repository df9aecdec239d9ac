from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from notetagger.core.models.tagger_settings import TaggerSettings
from notetagger.core.repositories.settings_repository import SettingsStore
from notetagger.utils.files import atomic_write_text
from notetagger.utils.logging import get_logger

logger = get_logger(__name__)


class JsonSettingsStore(SettingsStore):
    """Tagger settings kept as a JSON object in a single file.

    Stored keys are overlaid on the defaults; unknown keys are ignored so that
    older or newer files still load. A stored value that fails validation falls
    back to its default without discarding the other fields.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _read_stored(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as err:
            logger.warning("Could not read tagger settings from %s: %s", self._path, err)
            return {}
        if not isinstance(data, dict):
            logger.warning("Tagger settings in %s are not a JSON object, using defaults", self._path)
            return {}
        return data

    async def load(self) -> TaggerSettings:
        stored = await asyncio.to_thread(self._read_stored)
        known = {key: value for key, value in stored.items() if key in TaggerSettings.model_fields}
        try:
            return TaggerSettings(**known)
        except ValidationError as err:
            invalid = {error["loc"][0] for error in err.errors() if error["loc"]}
            logger.warning(
                "Invalid tagger settings in %s, using defaults for %s: %s",
                self._path,
                ", ".join(sorted(map(str, invalid))),
                err,
            )
        valid = {key: value for key, value in known.items() if key not in invalid}
        try:
            return TaggerSettings(**valid)
        except ValidationError as err:
            logger.warning("Invalid tagger settings in %s, using defaults: %s", self._path, err)
            return TaggerSettings()

    async def save(self, tagger_settings: TaggerSettings) -> None:
        payload = tagger_settings.model_dump()
        payload["api_key"] = tagger_settings.api_key.get_secret_value()
        text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
        await asyncio.to_thread(atomic_write_text, self._path, text)
        logger.info("Saved tagger settings to %s", self._path)
