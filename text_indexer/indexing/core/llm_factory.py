import logging
from typing import Optional

import requests

from text_indexer.indexing.core.config import IndexerConfig
from text_indexer.indexing.summarizer import (
    BaseSummarizer,
    NoopSummarizer,
    OllamaSummarizer,
    OpenAICompatSummarizer,
    get_summarizer_class,
)

logger = logging.getLogger(__name__)


def get_summarizer(
    config: IndexerConfig,
    session: Optional[requests.Session] = None,
) -> BaseSummarizer:
    """Return the summarizer selected by ``config.provider``."""
    provider = config.provider
    summarizer_cls = get_summarizer_class(provider)

    if summarizer_cls is OpenAICompatSummarizer:
        if not config.api_key:
            logger.warning("LLM_API_KEY is empty; index will be built without summaries/keywords")
            return NoopSummarizer(model=config.model or OpenAICompatSummarizer.default_model)
        logger.info(
            "Initializing OpenAI-compatible summarizer: %s @ %s",
            config.model or OpenAICompatSummarizer.default_model,
            config.openai_base,
        )
        return OpenAICompatSummarizer(
            api_key=config.api_key,
            base_url=config.openai_base,
            temperature=config.temperature,
            session=session,
        )

    if summarizer_cls is OllamaSummarizer:
        logger.info("Initializing Ollama summarizer @ %s", config.ollama_base)
        return OllamaSummarizer(base_url=config.ollama_base, session=session)

    if summarizer_cls is NoopSummarizer:
        logger.info("Initializing offline summarizer (no LLM backend)")
        return NoopSummarizer(model=config.model or OpenAICompatSummarizer.default_model)

    raise ValueError(f"Unknown provider: {provider}")
