"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from hn_classifier.core.entities import ClassificationResult, Datapoint


class ItemSource(ABC):
    """Interface for reading raw items from Hacker News."""

    @abstractmethod
    async def fetch_item(self, item_id: int) -> Optional[dict[str, Any]]:
        """Fetch raw item JSON, or None if the API has no such item."""
        pass


class LLMClient(ABC):
    """Interface for LLM operations."""

    @abstractmethod
    async def generate_classification(
        self, prompt: str, model: Optional[str] = None
    ) -> ClassificationResult:
        """Run a structured-generation call and return the parsed result."""
        pass


class DatasetLoader(ABC):
    """Interface for reading historical step inputs and outputs."""

    @abstractmethod
    def load(self, limit: int) -> list[Datapoint]:
        """Load up to ``limit`` most recent datapoints."""
        pass
