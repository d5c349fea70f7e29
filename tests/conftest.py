from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Iterator

import pytest


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.closed = False

    @property
    def content(self) -> bytes:
        return self.text.encode("utf-8")

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        data = self.content
        for i in range(0, len(data), chunk_size):
            yield data[i : i + chunk_size]

    def json(self) -> Any:
        return json.loads(self.text)

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Stands in for ``requests.Session``; replays queued responses or errors."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def post(
        self,
        url: str,
        json: Any = None,
        headers: Any = None,
        timeout: Any = None,
        stream: bool = False,
    ) -> FakeResponse:
        self.calls.append(
            {"url": url, "json": json, "headers": headers or {}, "timeout": timeout, "stream": stream}
        )
        result = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(result, Exception):
            raise result
        return result


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_clock(monkeypatch):
    from text_indexer.indexing.summarizer import http

    clock = FakeClock()
    monkeypatch.setattr(http, "time", SimpleNamespace(monotonic=clock.monotonic))
    return clock


def chat_payload(content: str) -> dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def chat_reply():
    return chat_payload
