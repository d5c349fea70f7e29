from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple


class BaseSummarizer(ABC):
    name: str
    default_model: Optional[str] = None

    @abstractmethod
    def summarize(
        self,
        model: str,
        filename: str,
        preview: str,
        timeout: Optional[float] = None,
    ) -> Tuple[str, List[str]]:
        """Return ``(summary, keywords)`` for one file or raise SummarizationError."""
        raise NotImplementedError

    def resolve_model(self, model: Optional[str]) -> str:
        return model or self.default_model or ""

    def get_metadata(self) -> Dict:
        return {
            "name": self.__class__.__name__,
            "provider": self.name,
        }
