"""Business logic use cases."""

import asyncio
from typing import Optional

from hn_classifier.config import Settings
from hn_classifier.core import (
    ComparisonStatistics,
    DatasetLoader,
    Datapoint,
    LLMClient,
    ModelOutcome,
    RunSummary,
)
from hn_classifier.tasks import classify_v2


def has_changes(stored: ModelOutcome, reference: ModelOutcome) -> bool:
    """True if the reference model disagrees with the stored output."""
    return (
        stored.is_ai_related != reference.is_ai_related
        or stored.hype_meter != reference.hype_meter
        or stored.tags != reference.tags
    )


def compute_statistics(summaries: list[RunSummary], labels: list[str]) -> ComparisonStatistics:
    """Aggregate change counts, disagreements and hype deltas."""
    changed = sum(1 for s in summaries if s.has_changes)

    ai_disagreements = 0
    for summary in summaries:
        values = {summary.stored.is_ai_related}
        values.update(summary.outcomes[label].is_ai_related for label in labels)
        if len(values) > 1:
            ai_disagreements += 1

    # Failed calls and missing stored values have no hype to compare
    average_hype_delta: dict[str, Optional[float]] = {}
    for label in labels:
        deltas = [
            s.outcomes[label].hype_meter - s.stored.hype_meter
            for s in summaries
            if s.outcomes[label].hype_meter is not None and s.stored.hype_meter is not None
        ]
        average_hype_delta[label] = sum(deltas) / len(deltas) if deltas else None

    return ComparisonStatistics(
        total=len(summaries),
        changed=changed,
        ai_disagreements=ai_disagreements,
        average_hype_delta=average_hype_delta,
    )


class ComparisonService:
    """Replay stored classification inputs through the v2 prompt on several models."""

    def __init__(
        self,
        dataset_loader: DatasetLoader,
        llm_client: LLMClient,
        settings: Settings,
    ) -> None:
        self.dataset_loader = dataset_loader
        self.llm_client = llm_client
        self.settings = settings
        self.models = dict(settings.compare.models)
        self.reference_label = settings.reference_label

    @property
    def labels(self) -> list[str]:
        return list(self.models)

    def load(self, limit: int) -> list[Datapoint]:
        """Load stored runs and drop those that cannot be compared."""
        dataset = self.dataset_loader.load(limit)

        valid: list[Datapoint] = []
        for datapoint in dataset:
            if not datapoint.output:
                print(f"⚠ Skipping run {datapoint.run_id} - no stored output")
                continue
            if datapoint.output.get("isAiRelated") is None:
                print(f"⚠ Warning: Run {datapoint.run_id} has missing isAiRelated field in stored data")
            valid.append(datapoint)
        return valid

    async def run_model(self, datapoint: Datapoint, model: str) -> ModelOutcome:
        result = await classify_v2(
            datapoint.title,
            datapoint.comment_text,
            model=model,
            llm_client=self.llm_client,
            settings=self.settings,
        )
        return ModelOutcome.from_result(result)

    async def replay(self, datapoints: list[Datapoint]) -> list[RunSummary]:
        """Classify every datapoint with every model at once.

        A failed call becomes a placeholder outcome; it does not cancel the
        other calls.
        """
        calls = [
            self.run_model(datapoint, model)
            for datapoint in datapoints
            for model in self.models.values()
        ]
        results = await asyncio.gather(*calls, return_exceptions=True)

        summaries: list[RunSummary] = []
        per_row = len(self.models)
        for i, datapoint in enumerate(datapoints):
            row = results[i * per_row:(i + 1) * per_row]
            outcomes = {
                label: result if isinstance(result, ModelOutcome) else ModelOutcome.failed(result)
                for label, result in zip(self.labels, row)
            }
            stored = ModelOutcome.from_output(datapoint.output or {})
            summaries.append(RunSummary(
                run_id=datapoint.run_id,
                title=datapoint.title,
                url=datapoint.url,
                comment_text=datapoint.comment_text,
                stored=stored,
                outcomes=outcomes,
                has_changes=has_changes(stored, outcomes[self.reference_label]),
            ))
        return summaries

    async def compare(self, limit: int) -> list[RunSummary]:
        """Load ``limit`` stored runs and replay them.

        The dataset query runs in a worker thread.
        """
        datapoints = await asyncio.to_thread(self.load, limit)
        if not datapoints:
            return []
        return await self.replay(datapoints)

    def statistics(self, summaries: list[RunSummary]) -> ComparisonStatistics:
        return compute_statistics(summaries, self.labels)
