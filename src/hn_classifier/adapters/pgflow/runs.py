"""Start flow runs and read their state from the pgflow schema."""

import json
from typing import Any, Optional

from hn_classifier.adapters.pgflow.db import get_cursor
from hn_classifier.core import FlowRun, StepState


class PgflowRuns:
    """Thin wrapper over the engine's SQL API."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def start_run(self, flow_slug: str, flow_input: dict[str, Any]) -> FlowRun:
        """Start a run; the engine's workers pick it up from there."""
        with get_cursor(self.database_url) as cur:
            cur.execute(
                "SELECT run_id, flow_slug, status, input, output "
                "FROM pgflow.start_flow(flow_slug => %s, input => %s::jsonb)",
                (flow_slug, json.dumps(flow_input)),
            )
            return self._to_run(cur.fetchone())

    def get_run(self, run_id: str) -> Optional[FlowRun]:
        with get_cursor(self.database_url) as cur:
            cur.execute(
                "SELECT run_id, flow_slug, status, input, output "
                "FROM pgflow.runs WHERE run_id = %s",
                (run_id,),
            )
            row = cur.fetchone()
        return self._to_run(row) if row else None

    def get_step_states(self, run_id: str) -> list[StepState]:
        with get_cursor(self.database_url) as cur:
            cur.execute(
                "SELECT step_slug, status, remaining_tasks "
                "FROM pgflow.step_states WHERE run_id = %s "
                "ORDER BY created_at, step_slug",
                (run_id,),
            )
            rows = cur.fetchall()
        return [
            StepState(
                step_slug=row["step_slug"],
                status=row["status"],
                remaining_tasks=row["remaining_tasks"],
            )
            for row in rows
        ]

    def get_step_output(self, run_id: str, step_slug: str) -> Optional[Any]:
        """Output of the completed task for a step, or None."""
        with get_cursor(self.database_url) as cur:
            cur.execute(
                "SELECT output FROM pgflow.step_tasks "
                "WHERE run_id = %s AND step_slug = %s AND status = 'completed' "
                "ORDER BY task_index LIMIT 1",
                (run_id, step_slug),
            )
            row = cur.fetchone()
        return row["output"] if row else None

    @staticmethod
    def _to_run(row: dict[str, Any]) -> FlowRun:
        return FlowRun(
            run_id=str(row["run_id"]),
            flow_slug=row["flow_slug"],
            status=row["status"],
            input=row["input"] or {},
            output=row["output"],
        )
