from __future__ import annotations

import json

import pytest

from text_indexer.core.errors import DecodeError, ParseError
from text_indexer.indexing.summary_prompt import (
    MAX_PROMPT_PREVIEW_CHARS,
    build_prompt,
    parse_summary_json,
)


def test_build_prompt_embeds_filename_and_preview() -> None:
    prompt = build_prompt("docs/readme.md", "hello world")

    assert prompt.startswith("File: docs/readme.md\n")
    assert '"summary"' in prompt and '"keywords"' in prompt
    assert "40-80 words" in prompt
    assert prompt.endswith("Text:\nhello world")


def test_build_prompt_truncates_preview() -> None:
    preview = "a" * MAX_PROMPT_PREVIEW_CHARS + "TAIL"

    prompt = build_prompt("big.txt", preview)

    assert "TAIL" not in prompt
    assert prompt.endswith("a" * MAX_PROMPT_PREVIEW_CHARS)


def test_build_prompt_is_deterministic() -> None:
    assert build_prompt("x.py", "print(1)") == build_prompt("x.py", "print(1)")


def test_parse_plain_object() -> None:
    summary, keywords = parse_summary_json('{"summary": "A file.", "keywords": ["a", "b"]}')

    assert summary == "A file."
    assert keywords == ["a", "b"]


def test_parse_strips_fence_and_prose() -> None:
    payload = {"summary": "Config loader for {env} values.", "keywords": ["config", "yaml", "env"]}
    reply = "Sure! Here is the JSON:\n```json\n" + json.dumps(payload) + "\n```\nLet me know if you need more."

    summary, keywords = parse_summary_json(reply)

    assert summary == payload["summary"]
    assert keywords == payload["keywords"]


def test_parse_ignores_extra_fields() -> None:
    summary, keywords = parse_summary_json(
        '{"summary": "s", "keywords": ["k"], "business_intent": "ignored", "score": 3}'
    )

    assert (summary, keywords) == ("s", ["k"])


def test_parse_missing_keywords_is_empty_list() -> None:
    assert parse_summary_json('{"summary": "only summary"}') == ("only summary", [])


@pytest.mark.parametrize(
    "reply",
    [
        "no json here at all",
        "} reversed braces {",
        '{"summary": "unterminated", "keywords": [}',
        "",
    ],
)
def test_parse_failures_raise_parse_error(reply: str) -> None:
    with pytest.raises(ParseError):
        parse_summary_json(reply)


@pytest.mark.parametrize(
    "reply",
    [
        '{"summary": 42, "keywords": []}',
        '{"summary": "s", "keywords": "a, b"}',
        '{"summary": "s", "keywords": [1, 2]}',
    ],
)
def test_parse_rejects_wrong_field_types(reply: str) -> None:
    with pytest.raises(ParseError):
        parse_summary_json(reply)


def test_parse_error_is_a_decode_error() -> None:
    with pytest.raises(DecodeError):
        parse_summary_json("nothing")


def test_parse_deeply_nested_reply_raises_parse_error() -> None:
    reply = '{"summary":"s","keywords":' + "[" * 100000 + "]" * 100000 + "}"

    with pytest.raises(ParseError) as excinfo:
        parse_summary_json(reply)

    assert excinfo.value.raw == reply


def test_parse_error_keeps_raw_reply_for_type_errors() -> None:
    reply = 'Here: {"summary": "s", "keywords": "a, b"}'

    with pytest.raises(ParseError) as excinfo:
        parse_summary_json(reply)

    assert excinfo.value.raw == reply
