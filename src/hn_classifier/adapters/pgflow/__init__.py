"""Read/write access to the pgflow schema."""

from hn_classifier.adapters.pgflow.dataset import PgflowDataset, load_dataset
from hn_classifier.adapters.pgflow.runs import PgflowRuns

__all__ = ["PgflowDataset", "PgflowRuns", "load_dataset"]
