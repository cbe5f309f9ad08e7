"""Flow wiring for the workflow engine.

A ``Flow`` is a declarative list of steps. Each step names the steps whose
outputs it consumes; the engine runs a step once all of them completed and
passes it ``{"run": <flow input>, <dependency slug>: <output>, ...}``.

    classifyHnItem
      item ──────────┐
                     ├──> classification
      firstComment ──┘
"""

import asyncio
import re
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Optional

from hn_classifier.config import Settings
from hn_classifier.core import FlowDefinitionError, ItemSource, LLMClient
from hn_classifier.tasks import classify, fetch_hn_first_comment, fetch_hn_item

StepHandler = Callable[[dict[str, Any]], Awaitable[Any]]

_SLUG_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
RESERVED_SLUGS = {"run"}

# Per-step options understood by pgflow.add_step
STEP_OPTIONS = ("max_attempts", "base_delay", "timeout", "start_delay")


def validate_slug(slug: str) -> None:
    if not _SLUG_RE.match(slug):
        raise FlowDefinitionError(f"Invalid slug '{slug}': use letters, digits and underscores")
    if slug in RESERVED_SLUGS:
        raise FlowDefinitionError(f"Slug '{slug}' is reserved")


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _sql_options(options: dict[str, Optional[int]]) -> list[str]:
    return [f"{key} => {value}" for key, value in options.items() if value is not None]


@dataclass(frozen=True)
class StepDefinition:
    """One named unit of work and its dependencies."""

    slug: str
    handler: StepHandler
    depends_on: tuple[str, ...] = ()
    options: dict[str, Optional[int]] = field(default_factory=dict)


@dataclass(frozen=True)
class Flow:
    """Immutable flow definition built with chained ``step`` calls."""

    slug: str
    max_attempts: Optional[int] = None
    base_delay: Optional[int] = None
    timeout: Optional[int] = None
    steps: tuple[StepDefinition, ...] = ()

    def __post_init__(self) -> None:
        validate_slug(self.slug)

    def step(
        self,
        slug: str,
        handler: StepHandler,
        depends_on: tuple[str, ...] | list[str] = (),
        **options: Optional[int],
    ) -> "Flow":
        """Return a new flow with one more step appended."""
        validate_slug(slug)
        if slug in self.step_slugs:
            raise FlowDefinitionError(f"Step '{slug}' is already defined in flow '{self.slug}'")

        unknown_options = set(options) - set(STEP_OPTIONS)
        if unknown_options:
            raise FlowDefinitionError(f"Unknown step options: {sorted(unknown_options)}")

        deps = tuple(depends_on)
        for dep in deps:
            if dep not in self.step_slugs:
                raise FlowDefinitionError(
                    f"Step '{slug}' depends on undefined step '{dep}'"
                )

        definition = StepDefinition(slug=slug, handler=handler, depends_on=deps, options=options)
        return replace(self, steps=self.steps + (definition,))

    @property
    def step_slugs(self) -> list[str]:
        return [s.slug for s in self.steps]

    def get_step(self, slug: str) -> StepDefinition:
        for step in self.steps:
            if step.slug == slug:
                return step
        raise KeyError(slug)

    def to_sql(self) -> str:
        """Render the statements that register this flow with pgflow."""
        flow_args = [_sql_literal(self.slug)] + _sql_options({
            "max_attempts": self.max_attempts,
            "base_delay": self.base_delay,
            "timeout": self.timeout,
        })
        statements = [f"SELECT pgflow.create_flow({', '.join(flow_args)});"]

        for step in self.steps:
            args = [_sql_literal(self.slug), _sql_literal(step.slug)]
            if step.depends_on:
                args.append("ARRAY[" + ", ".join(_sql_literal(d) for d in step.depends_on) + "]")
            args.extend(_sql_options(step.options))
            statements.append(f"SELECT pgflow.add_step({', '.join(args)});")

        return "\n".join(statements) + "\n"


def step_input(step: StepDefinition, flow_input: Any, outputs: dict[str, Any]) -> dict[str, Any]:
    """Assemble the input a step receives from the engine."""
    payload: dict[str, Any] = {"run": flow_input}
    for dep in step.depends_on:
        payload[dep] = outputs[dep]
    return payload


async def run_flow_locally(flow: Flow, flow_input: Any) -> dict[str, Any]:
    """Execute every step in-process and return outputs keyed by slug.

    Steps whose dependencies are satisfied run together. There is no retry
    and nothing is persisted; use the engine for real runs.
    """
    outputs: dict[str, Any] = {}
    pending = list(flow.steps)

    while pending:
        ready = [s for s in pending if all(dep in outputs for dep in s.depends_on)]
        results = await asyncio.gather(
            *(s.handler(step_input(s, flow_input, outputs)) for s in ready)
        )
        for step, result in zip(ready, results):
            outputs[step.slug] = result
        pending = [s for s in pending if s.slug not in outputs]

    return outputs


def build_classify_hn_item_flow(
    source: Optional[ItemSource] = None,
    llm_client: Optional[LLMClient] = None,
    settings: Optional[Settings] = None,
) -> Flow:
    """``item`` and ``firstComment`` run in parallel; ``classification``
    consumes both."""

    async def item(input: dict[str, Any]) -> dict[str, Any]:
        result = await fetch_hn_item(input["run"]["url"], source=source)
        return result.model_dump()

    async def first_comment(input: dict[str, Any]) -> dict[str, Any]:
        result = await fetch_hn_first_comment(input["run"]["url"], source=source)
        return result.model_dump()

    async def classification(input: dict[str, Any]) -> dict[str, Any]:
        result = await classify(
            input["item"]["title"],
            input["firstComment"]["text"],
            llm_client=llm_client,
            settings=settings,
        )
        return result.to_output()

    return (
        Flow(slug="classifyHnItem")
        .step("item", item)
        .step("firstComment", first_comment)
        .step("classification", classification, depends_on=["item", "firstComment"])
    )


classify_hn_item_flow = build_classify_hn_item_flow()
