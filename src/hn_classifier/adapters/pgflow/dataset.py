"""Load historical classification inputs and outputs for replay."""

from typing import Any

from hn_classifier.adapters.pgflow.db import get_cursor
from hn_classifier.core import DatasetLoader, Datapoint

# Target step input is rebuilt the way the engine assembles it: the run
# input under "run" plus one key per dependency slug.
DATASET_QUERY = """
WITH target_runs AS (
    SELECT DISTINCT
        st.run_id,
        st.output AS step_output,
        st.completed_at
    FROM pgflow.step_tasks st
    JOIN pgflow.runs r ON r.run_id = st.run_id
    WHERE st.step_slug = %(step_slug)s
      AND st.status = 'completed'
      AND r.flow_slug = %(flow_slug)s
    ORDER BY st.completed_at DESC
    LIMIT %(limit)s
),
deps_data AS (
    SELECT
        tr.run_id,
        dep.dep_slug,
        dep_task.output AS dep_output
    FROM target_runs tr
    JOIN pgflow.deps dep ON
        dep.flow_slug = %(flow_slug)s
        AND dep.step_slug = %(step_slug)s
    JOIN pgflow.step_tasks dep_task ON
        dep_task.run_id = tr.run_id
        AND dep_task.step_slug = dep.dep_slug
        AND dep_task.status = 'completed'
),
aggregated_deps AS (
    SELECT
        dd.run_id,
        jsonb_object_agg(dd.dep_slug, dd.dep_output) AS deps_output
    FROM deps_data dd
    GROUP BY dd.run_id
),
runs_data AS (
    SELECT
        r.run_id,
        r.input AS run_input
    FROM pgflow.runs r
    WHERE r.run_id IN (SELECT run_id FROM target_runs)
)
SELECT
    tr.run_id,
    jsonb_build_object('run', rd.run_input)
        || coalesce(ad.deps_output, '{}'::jsonb) AS input,
    tr.step_output AS output
FROM target_runs tr
JOIN runs_data rd ON rd.run_id = tr.run_id
LEFT JOIN aggregated_deps ad ON ad.run_id = tr.run_id
ORDER BY tr.run_id
"""


def load_dataset(
    limit: int,
    cursor: Any,
    flow_slug: str = "classifyHnItem",
    step_slug: str = "classification",
) -> list[Datapoint]:
    """Load the ``limit`` most recently completed ``step_slug`` tasks.

    Dependencies are discovered from ``pgflow.deps``, so the same query
    works for any step of any flow.
    """
    cursor.execute(
        DATASET_QUERY,
        {"limit": limit, "flow_slug": flow_slug, "step_slug": step_slug},
    )
    return [
        Datapoint(
            run_id=str(row["run_id"]),
            input=row["input"] or {},
            output=row["output"],
        )
        for row in cursor.fetchall()
    ]


class PgflowDataset(DatasetLoader):
    """Dataset loader backed by the pgflow tables."""

    def __init__(
        self,
        database_url: str,
        flow_slug: str = "classifyHnItem",
        step_slug: str = "classification",
    ) -> None:
        self.database_url = database_url
        self.flow_slug = flow_slug
        self.step_slug = step_slug

    def load(self, limit: int) -> list[Datapoint]:
        with get_cursor(self.database_url) as cur:
            return load_dataset(limit, cur, self.flow_slug, self.step_slug)
