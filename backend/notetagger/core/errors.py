from __future__ import annotations


class TaggingError(Exception):
    """Base exception for tag generation failures."""


class RemoteError(TaggingError):
    """Raised when the completion endpoint fails or cannot be reached.

    Carries the HTTP status code and raw response body when a response was
    received; both are None for transport-level faults.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ParseError(TaggingError):
    """Raised when a successful response is not a chat completion payload."""


class NoActiveDocumentError(TaggingError):
    """Raised when there is no note to operate on."""


class NoTagsProducedError(TaggingError):
    """Raised when generation succeeded but yielded no tags."""
