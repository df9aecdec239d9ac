from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from openai import AsyncOpenAI

from notetagger.config import settings
from notetagger.utils.logging import get_logger

if TYPE_CHECKING:
    from notetagger.core.models.tagger_settings import TaggerSettings


@lru_cache(maxsize=8)
def _build_client(api_key: str, base_url: str, timeout: float) -> AsyncOpenAI:
    logger = get_logger(__name__)
    logger.debug("Initializing OpenAI-compatible client for %s", base_url)
    # Retries are disabled: a failed call surfaces to the caller as-is
    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,
    )


def get_openai_client(config: TaggerSettings) -> AsyncOpenAI:
    """Return a client bound to the endpoint and key in `config`.

    Clients are cached per (api_key, base_url, timeout) so consecutive runs with
    unchanged settings share one connection pool.
    """
    return _build_client(
        config.api_key.get_secret_value(),
        config.base_url,
        settings.llm_timeout_seconds,
    )
