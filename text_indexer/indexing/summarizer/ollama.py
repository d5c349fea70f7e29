from typing import List, Optional, Tuple

import requests

from text_indexer.core.errors import DecodeError
from text_indexer.indexing.summarizer.base import BaseSummarizer
from text_indexer.indexing.summarizer.http import join_url, post_json
from text_indexer.indexing.summary_prompt import build_prompt, parse_summary_json

DEFAULT_OLLAMA_BASE = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.1:8b"
GENERATE_PATH = "/api/generate"


class OllamaSummarizer(BaseSummarizer):
    name = "ollama"
    default_model = DEFAULT_OLLAMA_MODEL

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_BASE,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url or DEFAULT_OLLAMA_BASE
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
            "prompt": build_prompt(filename, preview),
            "stream": False,
        }
        data = post_json(
            self.session,
            join_url(self.base_url, GENERATE_PATH),
            body,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )
        response = data.get("response")
        if not isinstance(response, str):
            raise DecodeError("generate response has no 'response' field")
        return parse_summary_json(response)

    def get_metadata(self):
        meta = super().get_metadata()
        meta["base_url"] = self.base_url
        return meta
