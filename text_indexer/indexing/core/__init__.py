"""Run configuration and backend selection."""

from text_indexer.indexing.core.config import IndexerConfig, load_yaml_config
from text_indexer.indexing.core.llm_factory import get_summarizer

__all__ = ["IndexerConfig", "load_yaml_config", "get_summarizer"]
