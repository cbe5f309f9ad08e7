"""Exceptions raised by the classifier."""


class HnClassifierError(Exception):
    """Base class for project errors."""


class InvalidHnUrlError(HnClassifierError, ValueError):
    """URL is not a Hacker News item URL."""


class HnItemNotFoundError(HnClassifierError, LookupError):
    """HN API returned null for the requested item."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class LLMResponseError(HnClassifierError):
    """LLM answered without usable structured content."""


class FlowDefinitionError(HnClassifierError, ValueError):
    """Flow wiring is inconsistent."""
