"""Core domain entities."""

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class HnStory(BaseModel):
    """Story shape returned by the HN API. Only the fields we use are checked."""

    model_config = ConfigDict(extra="allow", strict=True)

    id: int
    title: str = ""
    by: str = ""
    time: int = 0
    score: int = 0
    kids: Optional[list[int]] = None
    dead: Optional[bool] = None
    deleted: Optional[bool] = None


class HnApiComment(BaseModel):
    """Comment shape returned by the HN API."""

    model_config = ConfigDict(extra="allow", strict=True)

    by: str = ""
    text: str = ""
    dead: Optional[bool] = None
    deleted: Optional[bool] = None


class HnItem(BaseModel):
    """Output of the ``item`` step."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    by: str = ""
    time: int = 0
    score: int = 0

    @classmethod
    def empty(cls, item_id: int) -> "HnItem":
        """Sentinel for deleted or dead stories."""
        return cls(id=item_id)


class HnComment(BaseModel):
    """Output of the ``firstComment`` step."""

    model_config = ConfigDict(frozen=True)

    by: str = ""
    text: str = ""

    @classmethod
    def empty(cls) -> "HnComment":
        return cls()


class ClassificationResult(BaseModel):
    """Structured LLM output for one story."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_ai_related: bool = Field(alias="isAiRelated", description="Whether the content is AI/ML related")
    hype_meter: int = Field(alias="hypeMeter", ge=1, le=10, description="Hype level from 1-10")
    tags: list[str] = Field(max_length=3, description="Maximum 3 relevant tags")

    def to_output(self) -> dict[str, Any]:
        """JSON shape stored by the engine as the step output."""
        return self.model_dump(by_alias=True)


@dataclass
class Datapoint:
    """One historical classification: step input, stored output and run id."""

    run_id: str
    input: dict[str, Any]
    output: Optional[dict[str, Any]]

    @property
    def title(self) -> str:
        return (self.input.get("item") or {}).get("title") or ""

    @property
    def comment_text(self) -> str:
        return (self.input.get("firstComment") or {}).get("text") or ""

    @property
    def url(self) -> str:
        run = self.input.get("run") or {}
        item = self.input.get("item") or {}
        return run.get("url") or item.get("url") or ""


@dataclass
class ModelOutcome:
    """Classification as shown in the comparison report.

    Fields are None when the value is missing from stored data or the
    call failed.
    """

    is_ai_related: Optional[bool]
    hype_meter: Optional[int]
    tags: list[str] = field(default_factory=list)
    error: Optional[BaseException] = None

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ModelOutcome":
        return cls(
            is_ai_related=result.is_ai_related,
            hype_meter=result.hype_meter,
            tags=list(result.tags),
        )

    @classmethod
    def from_output(cls, output: dict[str, Any]) -> "ModelOutcome":
        """Build from a stored step output, tolerating missing fields."""
        return cls(
            is_ai_related=output.get("isAiRelated"),
            hype_meter=output.get("hypeMeter"),
            tags=list(output.get("tags") or []),
        )

    @classmethod
    def failed(cls, error: BaseException) -> "ModelOutcome":
        return cls(is_ai_related=None, hype_meter=None, tags=[], error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunSummary:
    """Comparison of one stored run against every replayed model."""

    run_id: str
    title: str
    url: str
    comment_text: str
    stored: ModelOutcome
    outcomes: dict[str, ModelOutcome]
    has_changes: bool


@dataclass
class ComparisonStatistics:
    """Aggregates over all compared runs."""

    total: int
    changed: int
    ai_disagreements: int
    average_hype_delta: dict[str, Optional[float]]


@dataclass
class FlowRun:
    """Run record read from the workflow engine."""

    run_id: str
    flow_slug: str
    status: str
    input: dict[str, Any]
    output: Optional[Any] = None


@dataclass
class StepState:
    """Per-step status of a run."""

    step_slug: str
    status: str
    remaining_tasks: Optional[int] = None
