import json
import logging
import time
from typing import Any, Dict, Optional

import requests

from text_indexer.core.errors import DecodeError, HTTPStatusError, TransportError

logger = logging.getLogger(__name__)

# urllib3 fills a chunk before yielding it; one byte keeps the deadline
# check live while a slow body trickles in.
READ_CHUNK_SIZE = 1


def join_url(base: str, path: str) -> str:
    return base.rstrip("/") + path


def _read_body(
    resp: requests.Response,
    url: str,
    deadline: Optional[float],
    timeout: Optional[float],
) -> bytes:
    chunks = []
    try:
        for chunk in resp.iter_content(chunk_size=READ_CHUNK_SIZE):
            chunks.append(chunk)
            if deadline is not None and time.monotonic() > deadline:
                raise TransportError(f"request to {url} timed out after {timeout}s")
    except requests.RequestException as exc:
        raise TransportError(f"request to {url} failed while reading the response: {exc}") from exc
    return b"".join(chunks)


def post_json(
    session: requests.Session,
    url: str,
    body: Dict[str, Any],
    *,
    timeout: Optional[float],
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """POST ``body`` as JSON and return the decoded JSON object.

    ``timeout`` bounds the whole call, body included: the response is
    streamed and dropped once the deadline passes. Maps ``requests``
    failures onto the summarization error kinds. The response is always
    closed before returning.
    """
    deadline = time.monotonic() + timeout if timeout else None
    try:
        resp = session.post(url, json=body, headers=headers or {}, timeout=timeout, stream=True)
    except requests.Timeout as exc:
        raise TransportError(f"request to {url} timed out after {timeout}s: {exc}") from exc
    except requests.RequestException as exc:
        raise TransportError(f"request to {url} failed: {exc}") from exc

    try:
        raw = _read_body(resp, url, deadline, timeout)
        if resp.status_code // 100 != 2:
            raise HTTPStatusError(resp.status_code, raw.decode("utf-8", errors="replace"))
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise DecodeError(f"invalid JSON response from {url}: {exc}") from exc
    finally:
        resp.close()

    if not isinstance(data, dict):
        raise DecodeError(f"unexpected JSON response from {url}: expected an object")
    logger.debug("POST %s -> %s (%d bytes)", url, resp.status_code, len(raw))
    return data
