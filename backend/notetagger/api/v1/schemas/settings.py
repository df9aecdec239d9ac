from __future__ import annotations

from pydantic import Field, SecretStr

from notetagger.core.models.base import AppBaseModel
from notetagger.core.models.tagger_settings import MAX_RESULTS, MIN_RESULTS


class TaggerSettingsRead(AppBaseModel):
    api_key: str = Field(description="Masked; empty when no key is configured")
    model_name: str
    base_url: str
    custom_prompt: str
    max_results: int


class TaggerSettingsUpdate(AppBaseModel):
    """Partial update; omitted fields keep their stored value."""

    api_key: SecretStr | None = None
    model_name: str | None = Field(default=None, min_length=1)
    base_url: str | None = Field(default=None, min_length=1)
    custom_prompt: str | None = None
    max_results: int | None = Field(default=None, ge=MIN_RESULTS, le=MAX_RESULTS)
