import json
from typing import Any, List, Tuple

from text_indexer.core.errors import ParseError

MAX_PROMPT_PREVIEW_CHARS = 6000

SYSTEM_PROMPT = 'Reply with ONLY a JSON object: {"summary": "...", "keywords": ["..."]}'

DEFAULT_FILE_PROMPT = (
    "File: {filename}\n"
    "Return ONLY:\n"
    '{{"summary":"1-2 sentences, 40-80 words, no line breaks",'
    '"keywords":["5-10 lowercase keywords"]}}\n'
    "Text:\n"
    "{preview}"
)


def build_prompt(filename: str, preview: str) -> str:
    if len(preview) > MAX_PROMPT_PREVIEW_CHARS:
        preview = preview[:MAX_PROMPT_PREVIEW_CHARS]
    return DEFAULT_FILE_PROMPT.format(filename=filename, preview=preview)


def _coerce_keywords(value: Any, text: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError("keywords must be a list of strings", raw=text)
    return list(value)


def parse_summary_json(text: str) -> Tuple[str, List[str]]:
    """Recover ``(summary, keywords)`` from a model reply.

    Models often wrap the object in a Markdown fence or add a sentence
    before/after it, so everything outside the first ``{`` and the last
    ``}`` is discarded before decoding. This is brace scanning, not a JSON
    tokenizer: an unbalanced brace inside a string value can still defeat it.
    """
    text = (text or "").strip()
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        raise ParseError("no JSON object found in model reply", raw=text)
    try:
        payload = json.loads(text[start : end + 1])
    except (ValueError, RecursionError) as exc:
        raise ParseError(f"invalid JSON in model reply: {exc}", raw=text) from exc

    if not isinstance(payload, dict):
        raise ParseError("model reply is not a JSON object", raw=text)

    summary = payload.get("summary")
    if summary is None:
        summary = ""
    if not isinstance(summary, str):
        raise ParseError("summary must be a string", raw=text)
    return summary, _coerce_keywords(payload.get("keywords"), text)
