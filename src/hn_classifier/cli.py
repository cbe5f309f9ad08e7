"""CLI entry point for the HN classifier."""

import asyncio
import json
from pathlib import Path
from typing import NoReturn, Optional

import typer

from hn_classifier.adapters.llm import OpenAIClient
from hn_classifier.adapters.pgflow import PgflowDataset, PgflowRuns
from hn_classifier.adapters.report import TerminalReport
from hn_classifier.config import Settings, get_settings
from hn_classifier.flows import build_classify_hn_item_flow, classify_hn_item_flow, run_flow_locally
from hn_classifier.tasks import default_source
from hn_classifier.use_cases import ComparisonService

app = typer.Typer(help="Classify Hacker News posts and compare prompt/model variants.")


def require_api_key(settings: Settings) -> None:
    """Exit before any network call if the OpenAI key is missing."""
    if not settings.openai_api_key:
        print("OPENAI_API_KEY environment variable is required")
        raise typer.Exit(code=1)


def fail(what: str, error: Exception) -> NoReturn:
    print(f"{what} failed: {error}")
    raise typer.Exit(code=1)


@app.command()
def compare(
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Number of recent runs to compare"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Replay stored classification inputs through the v2 prompt on several models."""
    settings = get_settings(config)
    require_api_key(settings)
    limit = limit or settings.compare.default_limit

    try:
        asyncio.run(async_compare(settings, limit))
    except Exception as e:
        fail("Comparison", e)


async def async_compare(settings: Settings, limit: int) -> None:
    """Async implementation of compare command."""
    service = ComparisonService(
        dataset_loader=PgflowDataset(
            settings.database_url,
            flow_slug=settings.compare.flow_slug,
            step_slug=settings.compare.step_slug,
        ),
        llm_client=OpenAIClient(settings),
        settings=settings,
    )
    report = TerminalReport(service.labels, service.reference_label)

    print("\n".join(report.header(limit)))
    print(f"⚠ Note: Testing enhanced v2 prompt (different from original) across {len(service.models)} models.\n")
    print("Running classifications in parallel...\n")

    summaries = await service.compare(limit)
    if not summaries:
        print("No completed classification runs found. Run some flows first!")
        return

    print("\n".join(report.found(len(summaries))))

    for i, summary in enumerate(summaries, 1):
        print("\n".join(report.detail_block(summary, i, len(summaries))))

    if len(summaries) > 1:
        print("\n".join(report.summary_tables(summaries, service.statistics(summaries))))

    print("\n".join(report.footer(len(summaries), limit)))


@app.command()
def classify(
    url: str = typer.Argument(..., help="HN item URL, e.g. https://news.ycombinator.com/item?id=1"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Run the classifyHnItem flow in-process and print every step output."""
    settings = get_settings(config)
    require_api_key(settings)

    flow = build_classify_hn_item_flow(
        source=default_source(settings),
        llm_client=OpenAIClient(settings),
        settings=settings,
    )
    try:
        outputs = asyncio.run(run_flow_locally(flow, {"url": url}))
    except Exception as e:
        fail("Classification", e)
    print(json.dumps(outputs, indent=2, ensure_ascii=False))


@app.command()
def start(
    url: str = typer.Argument(..., help="HN item URL"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Start a classifyHnItem run on the workflow engine."""
    settings = get_settings(config)
    try:
        run = PgflowRuns(settings.database_url).start_run(classify_hn_item_flow.slug, {"url": url})
    except Exception as e:
        fail("Start", e)
    print(f"✓ Started run {run.run_id} ({run.status})")


@app.command()
def status(
    run_id: str = typer.Argument(..., help="Run id returned by `start`"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
) -> None:
    """Show run and step status, plus the classification output when done."""
    settings = get_settings(config)
    runs = PgflowRuns(settings.database_url)
    try:
        run = runs.get_run(run_id)
        if run is None:
            print(f"✗ Run {run_id} not found")
            raise typer.Exit(code=1)
        steps = runs.get_step_states(run_id)
        output = runs.get_step_output(run_id, settings.compare.step_slug)
    except typer.Exit:
        raise
    except Exception as e:
        fail("Status", e)

    print(f"Run {run.run_id} [{run.flow_slug}]: {run.status}")
    for step in steps:
        print(f"  └─ {step.step_slug}: {step.status}")
    if output is not None:
        print(json.dumps(output, indent=2, ensure_ascii=False))


@app.command("compile")
def compile_flow() -> None:
    """Print the SQL that registers the flow with pgflow."""
    print(classify_hn_item_flow.to_sql(), end="")


if __name__ == "__main__":
    app()
