from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from notetagger.api.v1.schemas.settings import TaggerSettingsRead, TaggerSettingsUpdate
from notetagger.core.models.tagger_settings import TaggerSettings
from notetagger.dependencies import get_settings_store

if TYPE_CHECKING:
    from notetagger.core.repositories.settings_repository import SettingsStore

router = APIRouter()

MASK = "********"


def _to_read(tagger_settings: TaggerSettings) -> TaggerSettingsRead:
    return TaggerSettingsRead(
        api_key=MASK if tagger_settings.api_key.get_secret_value() else "",
        model_name=tagger_settings.model_name,
        base_url=tagger_settings.base_url,
        custom_prompt=tagger_settings.custom_prompt,
        max_results=tagger_settings.max_results,
    )


@router.get("/", response_model=TaggerSettingsRead)
async def read_settings(store: SettingsStore = Depends(get_settings_store)):
    """Return the tagger settings. The API key is never echoed back."""
    return _to_read(await store.load())


@router.put("/", response_model=TaggerSettingsRead)
async def update_settings(
    payload: TaggerSettingsUpdate,
    store: SettingsStore = Depends(get_settings_store),
):
    current = await store.load()
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    try:
        updated = TaggerSettings.model_validate({**current.model_dump(), **changes})
    except ValidationError as err:
        raise HTTPException(status_code=422, detail=err.errors(include_url=False)) from err
    await store.save(updated)
    return _to_read(updated)
