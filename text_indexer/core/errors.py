"""Failures raised by summarizer backends.

Every backend failure derives from :class:`SummarizationError` so the
traversal loop can record them uniformly as the item's ``error``.
"""

from typing import Optional


class SummarizationError(RuntimeError):
    """Base class for any failure to summarize a single file."""


class TransportError(SummarizationError):
    """The backend could not be reached (refused, DNS, timeout)."""


class HTTPStatusError(SummarizationError):
    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = int(status_code)
        self.body = (body or "").strip()
        super().__init__(f"http {self.status_code}: {self.body}")


class DecodeError(SummarizationError):
    """The backend envelope was not the JSON we expected."""


class ParseError(DecodeError):
    """The model reply did not contain a usable summary/keywords object."""

    def __init__(self, message: str, raw: Optional[str] = None) -> None:
        self.raw = raw
        super().__init__(message)
