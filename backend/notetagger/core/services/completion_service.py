from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

import openai

from notetagger.core.errors import ParseError, RemoteError
from notetagger.utils.logging import get_logger
from notetagger.utils.openai_client import get_openai_client

if TYPE_CHECKING:
    from openai import AsyncOpenAI

    from notetagger.core.models.tagger_settings import TaggerSettings

logger = get_logger(__name__)

MAX_CONTENT_CHARS = 1000

SYSTEM_MESSAGE = (
    "You are a professional note tagging assistant. You are good at distilling core "
    "concepts and only generate tags that are truly relevant and necessary. "
    "Answer in the same language as the note."
)

# ASCII comma and full-width comma (U+FF0C)
TAG_SEPARATORS = re.compile(r"[,，]")


def truncate_content(content: str) -> str:
    """Return at most the first MAX_CONTENT_CHARS characters of `content`."""
    return content[:MAX_CONTENT_CHARS]


def build_prompt(title: str, content: str, custom_prompt: str) -> str:
    """Assemble the user message from the instruction template and the note."""
    sections = [custom_prompt.strip()]
    if title:
        sections.append(f'Title: "{title}"')
    sections.append(f"Content:\n{truncate_content(content)}")
    sections.append("Tags:")
    return "\n\n".join(sections)


def build_messages(prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_MESSAGE},
        {"role": "user", "content": prompt},
    ]


def parse_tags(text: str) -> list[str]:
    """Split a comma-delimited completion into trimmed, non-empty tags.

    Order is preserved and duplicates are kept.
    """
    return [fragment.strip() for fragment in TAG_SEPARATORS.split(text) if fragment.strip()]


def extract_completion_text(body: str) -> str:
    """Pull `choices[0].message.content` out of a raw chat completion body."""
    try:
        payload: Any = json.loads(body)
        content = payload["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as err:
        raise ParseError(f"Unexpected completion payload: {err}") from err
    if content is None:
        return ""
    if not isinstance(content, str):
        raise ParseError(f"Completion content is {type(content).__name__}, expected str")
    return content.strip()


async def generate_tags(
    title: str,
    content: str,
    config: TaggerSettings,
    *,
    client: AsyncOpenAI | None = None,
) -> list[str]:
    """Ask the completion endpoint for tags describing a note.

    Issues exactly one POST to `<base_url>/chat/completions`. The answer is split
    on commas and cut to `config.max_results`; it is never padded.

    Raises:
        RemoteError: non-200 status or transport failure
        ParseError: the 200 body is not a chat completion
    """
    logger.info("Requesting tags - model: %s, title: %r, content length: %d",
                config.model_name, title, len(content))

    prompt = build_prompt(title, content, config.custom_prompt)
    llm = client or get_openai_client(config)

    try:
        raw = await llm.chat.completions.with_raw_response.create(
            model=config.model_name,
            messages=build_messages(prompt),
        )
    except openai.APIStatusError as err:
        body = err.response.text
        logger.error("Completion request failed: %s %s", err.status_code, body)
        raise RemoteError(
            f"Completion request failed with status {err.status_code}",
            status_code=err.status_code,
            body=body,
        ) from err
    except openai.APIConnectionError as err:
        logger.error("Completion request could not be sent: %s", err)
        raise RemoteError(f"Completion endpoint unreachable: {err}") from err

    response = raw.http_response
    if response.status_code != 200:
        logger.error("Completion request failed: %s %s", response.status_code, response.text)
        raise RemoteError(
            f"Completion request failed with status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )

    answer = extract_completion_text(response.text)
    logger.debug("Completion answer: %s", answer)

    tags = parse_tags(answer)[: config.max_results]
    logger.info("Generated %d tag(s)", len(tags))
    return tags
