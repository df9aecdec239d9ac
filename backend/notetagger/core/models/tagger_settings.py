from __future__ import annotations

from pydantic import ConfigDict, Field, SecretStr

from .base import AppBaseModel

DEFAULT_MODEL_NAME = "openai/gpt-4o-mini-2024-07-18"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MAX_RESULTS = 4
MIN_RESULTS = 1
MAX_RESULTS = 10

DEFAULT_CUSTOM_PROMPT = (
    "Based on the title and content of the note below, generate at most 4 tags "
    "that describe it as closely and precisely as possible. Important:\n"
    "1. Only generate tags that are truly relevant and necessary; do not pad the list to 4.\n"
    "2. If the content only supports a few tags, return only those precise tags.\n"
    "3. Each tag is at most 3 words and does not contain the # character.\n"
    "4. List the tags directly, separated by commas, without any other explanation."
)


class TaggerSettings(AppBaseModel):
    """User configuration for tag generation.

    Read once per pipeline run and passed by value; nothing in the core keeps
    a reference to it between runs.
    """

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
        frozen=True,
    )

    api_key: SecretStr = Field(default=SecretStr(""), description="Bearer token for the completion endpoint")
    model_name: str = Field(default=DEFAULT_MODEL_NAME, description="Model identifier sent with each request")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Base URL of an OpenAI-compatible API")
    custom_prompt: str = Field(default=DEFAULT_CUSTOM_PROMPT, description="Instruction template prepended to the prompt")
    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        ge=MIN_RESULTS,
        le=MAX_RESULTS,
        description="Upper bound on the number of tags kept from a completion",
    )
