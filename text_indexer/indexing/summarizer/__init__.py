from text_indexer.indexing.summarizer.base import BaseSummarizer
from text_indexer.indexing.summarizer.noop import NoopSummarizer
from text_indexer.indexing.summarizer.ollama import OllamaSummarizer
from text_indexer.indexing.summarizer.openai_compat import OpenAICompatSummarizer

SUMMARIZER_REGISTRY = {
    "noop": NoopSummarizer,
    "openai": OpenAICompatSummarizer,
    "ollama": OllamaSummarizer,
}


def get_summarizer_class(provider: str):
    summarizer_cls = SUMMARIZER_REGISTRY.get(provider)
    if summarizer_cls is None:
        raise ValueError(f"Unknown provider: {provider}")
    return summarizer_cls


__all__ = [
    "BaseSummarizer",
    "NoopSummarizer",
    "OllamaSummarizer",
    "OpenAICompatSummarizer",
    "SUMMARIZER_REGISTRY",
    "get_summarizer_class",
]
