"""Front matter detection, parsing and tag merging.

A front matter block is recognised only at the very start of a note:

    ---            opening fence, first line of the text
    key: value     YAML mapping (may be empty)
    ---            closing fence, next line equal to the marker

Anything else, including an opening fence that is never closed, means the
note has no front matter. The rewritten block is emitted as canonical YAML, so
fields other than `tags` keep their values but not necessarily their original
quoting or list style.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import yaml

from notetagger.utils.logging import get_logger

logger = get_logger(__name__)

FENCE = "---"
TAGS_KEY = "tags"

BOOL_TAG = "tag:yaml.org,2002:bool"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that only reads `true`/`false` as booleans.

    PyYAML follows YAML 1.1, where `yes`, `no`, `on` and `off` are booleans too.
    Fields like `country: NO` must stay strings when the block is rewritten.
    """


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontMatterLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


@dataclass(frozen=True)
class FrontMatterBlock:
    """Location of a fenced block inside a note.

    `end` is the offset just past the closing fence marker; the closing line's
    terminator, if any, belongs to the body.
    """

    start: int
    end: int
    content: str
    newline: str


def _split_terminator(line: str) -> tuple[str, str]:
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def find_front_matter(text: str) -> FrontMatterBlock | None:
    """Locate the fenced block at the start of `text`, if there is one."""
    lines = text.splitlines(keepends=True)
    if not lines:
        return None

    first, newline = _split_terminator(lines[0])
    if first != FENCE or not newline:
        return None

    offset = len(lines[0])
    content_start = offset
    for line in lines[1:]:
        stripped, _ = _split_terminator(line)
        if stripped == FENCE:
            return FrontMatterBlock(
                start=0,
                end=offset + len(FENCE),
                content=text[content_start:offset],
                newline=newline,
            )
        offset += len(line)

    logger.debug("Unterminated front matter fence, treating note as having none")
    return None


def parse_front_matter(text: str) -> dict[str, Any] | None:
    """Return the note's front matter as a mapping, or None if it has none.

    Invalid YAML and non-mapping documents are treated as absent.
    """
    block = find_front_matter(text)
    if block is None:
        return None
    try:
        data = yaml.load(block.content, Loader=FrontMatterLoader)  # noqa: S506
    except yaml.YAMLError as err:
        logger.warning("Ignoring unparsable front matter: %s", err)
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring front matter of type %s", type(data).__name__)
        return None
    return data


def serialize_front_matter(mapping: dict[str, Any]) -> str:
    """Dump `mapping` as block-style YAML; an empty mapping gives ''."""
    if not mapping:
        return ""
    return yaml.safe_dump(
        mapping,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _render_block(mapping: dict[str, Any], newline: str) -> str:
    body = serialize_front_matter(mapping)
    if newline != "\n":
        body = body.replace("\n", newline)
    return f"{FENCE}{newline}{body}{FENCE}"


def merge_tags(
    text: str,
    front_matter: dict[str, Any] | None,
    new_tags: Sequence[str],
) -> str:
    """Return `text` with its front matter `tags` replaced by `new_tags`.

    With existing front matter every other field is carried over, and `tags`
    is dropped entirely when `new_tags` is empty. Without front matter a new
    block holding only `tags` is prepended, unless `new_tags` is empty, in which
    case `text` is returned unchanged. The body is never modified.
    """
    tags = list(new_tags)

    block = find_front_matter(text) if front_matter is not None else None
    if front_matter is not None and block is None:
        logger.warning("Front matter supplied but no fenced block found, treating as absent")

    if block is not None:
        working = {key: value for key, value in front_matter.items() if key != TAGS_KEY}
        if tags:
            working[TAGS_KEY] = tags
        return text[: block.start] + _render_block(working, block.newline) + text[block.end:]

    if not tags:
        return text
    return _render_block({TAGS_KEY: tags}, "\n") + "\n\n" + text
