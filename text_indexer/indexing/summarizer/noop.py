from typing import List, Optional, Tuple

from text_indexer.indexing.summarizer.base import BaseSummarizer

MAX_SUMMARY_TOKENS = 50
NOOP_KEYWORDS = ("texto", "sin-llm")


class NoopSummarizer(BaseSummarizer):
    """Offline fallback: the first words of the preview, no backend call."""

    name = "noop"

    def __init__(self, model: Optional[str] = None) -> None:
        self.default_model = model

    def summarize(
        self,
        model: str,
        filename: str,
        preview: str,
        timeout: Optional[float] = None,
    ) -> Tuple[str, List[str]]:
        tokens = preview.split()[:MAX_SUMMARY_TOKENS]
        return " ".join(tokens), list(NOOP_KEYWORDS)
