"""Core domain layer."""

from hn_classifier.core.entities import (
    ClassificationResult,
    ComparisonStatistics,
    Datapoint,
    FlowRun,
    HnApiComment,
    HnComment,
    HnItem,
    HnStory,
    ModelOutcome,
    RunSummary,
    StepState,
)
from hn_classifier.core.exceptions import (
    FlowDefinitionError,
    HnClassifierError,
    HnItemNotFoundError,
    InvalidHnUrlError,
    LLMResponseError,
)
from hn_classifier.core.interfaces import DatasetLoader, ItemSource, LLMClient
from hn_classifier.core.parsing import clean_html, extract_item_id

__all__ = [
    "ClassificationResult",
    "ComparisonStatistics",
    "Datapoint",
    "FlowRun",
    "HnApiComment",
    "HnComment",
    "HnItem",
    "HnStory",
    "ModelOutcome",
    "RunSummary",
    "StepState",
    "FlowDefinitionError",
    "HnClassifierError",
    "HnItemNotFoundError",
    "InvalidHnUrlError",
    "LLMResponseError",
    "DatasetLoader",
    "ItemSource",
    "LLMClient",
    "clean_html",
    "extract_item_id",
]
