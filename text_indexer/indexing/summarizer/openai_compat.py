from typing import List, Optional, Tuple

import requests

from text_indexer.core.errors import DecodeError
from text_indexer.indexing.summarizer.base import BaseSummarizer
from text_indexer.indexing.summarizer.http import join_url, post_json
from text_indexer.indexing.summary_prompt import SYSTEM_PROMPT, build_prompt, parse_summary_json

DEFAULT_OPENAI_BASE = "https://api.openai.com"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


class OpenAICompatSummarizer(BaseSummarizer):
    """Chat Completions API, or any server that speaks the same protocol (vLLM, LM Studio, ...)."""

    name = "openai"
    default_model = DEFAULT_OPENAI_MODEL

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_OPENAI_BASE,
        temperature: float = 0.2,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required for provider=openai.")
        self.api_key = api_key
        self.base_url = base_url or DEFAULT_OPENAI_BASE
        self.temperature = temperature
        self.session = session or requests.Session()

    def summarize(
        self,
        model: str,
        filename: str,
        preview: str,
        timeout: Optional[float] = None,
    ) -> Tuple[str, List[str]]:
        body = {
            "model": self.resolve_model(model),
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(filename, preview)},
            ],
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        data = post_json(
            self.session,
            join_url(self.base_url, CHAT_COMPLETIONS_PATH),
            body,
            timeout=timeout,
            headers=headers,
        )

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise DecodeError("no choices in chat completion response")
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise DecodeError("chat completion response has no message content")
        return parse_summary_json(content)

    def get_metadata(self):
        meta = super().get_metadata()
        meta["base_url"] = self.base_url
        return meta
