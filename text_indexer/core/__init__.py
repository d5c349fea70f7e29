from text_indexer.core.contract import ZERO_TIME, Index, IndexItem
from text_indexer.core.errors import (
    DecodeError,
    HTTPStatusError,
    ParseError,
    SummarizationError,
    TransportError,
)

__all__ = [
    "ZERO_TIME",
    "Index",
    "IndexItem",
    "SummarizationError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "ParseError",
]
