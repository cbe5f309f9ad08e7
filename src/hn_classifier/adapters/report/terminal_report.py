"""Colored terminal rendering of a model comparison."""

import json
import re
from typing import Optional

import typer

from hn_classifier.core import ComparisonStatistics, ModelOutcome, RunSummary

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

TITLE_WIDTH = 40
VALUE_WIDTH = 10
TAGS_WIDTH = 50
COMMENT_PREVIEW_CHARS = 100
SUMMARY_TITLE_CHARS = 50


def bold(text: str) -> str:
    return typer.style(text, bold=True)


def dim(text: str) -> str:
    return typer.style(text, dim=True)


def rule(width: int = 70, char: str = "-") -> str:
    return typer.style(char * width, fg=typer.colors.BRIGHT_BLACK)


def visible_length(text: str) -> int:
    """Length of text as displayed, ignoring ANSI escape codes."""
    return len(_ANSI_RE.sub("", text))


def pad(text: str, width: int) -> str:
    """Left-justify styled text to ``width`` visible columns."""
    missing = width - visible_length(text)
    return text + " " * missing if missing > 0 else text


def format_bool(value: Optional[bool]) -> str:
    if value is None:
        return typer.style("missing", fg=typer.colors.RED)
    if value:
        return typer.style("true", fg=typer.colors.GREEN)
    return dim("false")


def format_hype(value: Optional[int]) -> str:
    if value is None:
        return typer.style("✗", fg=typer.colors.RED)
    if value >= 7:
        color = typer.colors.RED
    elif value >= 4:
        color = typer.colors.YELLOW
    else:
        color = typer.colors.GREEN
    return typer.style(str(value), fg=color)


def format_tags(tags: list[str]) -> str:
    """Compact tag list: two tags in full, otherwise first tag plus a count."""
    if not tags:
        return "[]"
    if len(tags) <= 2:
        return f"[{', '.join(tags)}]"
    return f"[{tags[0]}, +{len(tags) - 1}]"


def format_delta(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f}"


def shorten(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class TerminalReport:
    """Build the lines of the comparison report."""

    def __init__(self, labels: list[str], reference_label: str) -> None:
        self.labels = labels
        self.reference_label = reference_label

    def header(self, limit: int) -> list[str]:
        what = "the most recent" if limit == 1 else f"{limit} recent"
        plural = "" if limit == 1 else "s"
        return [bold(f"🔍 Loading {what} classification run{plural} for comparison..."), ""]

    def found(self, count: int) -> list[str]:
        plural = "" if count == 1 else "s"
        return [
            f"{typer.style('✓', fg=typer.colors.GREEN)} Found {count} run{plural} to compare.",
            "",
        ]

    def detail_block(self, summary: RunSummary, index: int, total: int) -> list[str]:
        """Per-run breakdown of every field for stored and replayed outputs."""
        lines: list[str] = []
        if total > 1:
            lines.append(bold(typer.style(f"━━━ Run {index} of {total} ━━━", fg=typer.colors.BLUE)))
        lines.append(dim(f"Run ID: {summary.run_id}"))
        if summary.url:
            lines.append(f"{bold('URL:')} {typer.style(summary.url, fg=typer.colors.CYAN)}")
        lines.append(f'{bold("Title:")} "{summary.title}"')
        if summary.comment_text:
            lines.append(dim(f"Comment preview: {shorten(summary.comment_text, COMMENT_PREVIEW_CHARS)}"))
        lines.append("")

        lines.append(bold("📊 Classification Results:"))
        lines.append(rule())

        lines.append(bold("isAiRelated:"))
        lines.extend(self._field_rows(summary, lambda o: format_bool(o.is_ai_related)))
        lines.append("")

        lines.append(bold("hypeMeter:"))
        lines.extend(self._field_rows(summary, lambda o: format_hype(o.hype_meter)))
        lines.append("")

        lines.append(bold("tags:"))
        lines.extend(self._field_rows(
            summary,
            lambda o: typer.style(json.dumps(o.tags), fg=typer.colors.CYAN),
            stored=lambda o: dim(json.dumps(o.tags)),
        ))

        for label, outcome in summary.outcomes.items():
            if not outcome.ok:
                lines.append(typer.style(f"  ⚠ {label} failed: {outcome.error}", fg=typer.colors.YELLOW))

        lines.append("")
        if summary.has_changes:
            status = typer.style("changed", fg=typer.colors.YELLOW, bold=True)
        else:
            status = typer.style("unchanged", fg=typer.colors.GREEN)
        lines.append(f"{bold('Status:')} {status} ({self.reference_label} vs original)")

        if total > 1:
            lines.extend(["", rule(char="═"), ""])
        return lines

    def summary_tables(
        self, summaries: list[RunSummary], stats: ComparisonStatistics
    ) -> list[str]:
        """Cross-run tables and statistics."""
        lines: list[str] = []
        lines.extend(self._value_table("📊 AI Related Classification", summaries, lambda o: format_bool(o.is_ai_related)))
        lines.extend(self._value_table("📊 Hype Meter Scores", summaries, lambda o: format_hype(o.hype_meter)))
        lines.extend(self._tags_table(summaries))

        lines.append("")
        lines.append(bold("📈 Statistics:"))
        lines.append(f"  • Runs with changes: {stats.changed}/{stats.total}")
        lines.append(f"  • AI classification disagreements: {stats.ai_disagreements}")
        lines.append("  • Average hype change from stored:")
        for label in self.labels:
            lines.append(f"    - {(label + ':').ljust(6)} {format_delta(stats.average_hype_delta.get(label))}")

        lines.append("")
        lines.append(bold("🔗 URLs:"))
        for i, summary in enumerate(summaries, 1):
            lines.append(f"  {i}. {typer.style(summary.url, fg=typer.colors.CYAN)}")
        return lines

    def footer(self, processed: int, limit: int) -> list[str]:
        plural = "" if processed == 1 else "s"
        done = bold(typer.style("✅ Comparison complete!", fg=typer.colors.GREEN))
        lines = ["", f"{done} Processed {processed} run{plural}.", ""]
        if limit == 1:
            lines.append(dim("💡 Tip: Use --limit N to compare multiple runs"))
        else:
            models = ", ".join(self.labels)
            lines.append(dim(f"📝 Note: Comparing v2 prompt across models ({models}) to test classification consistency."))
        return lines

    def _field_rows(self, summary: RunSummary, fmt, stored=None) -> list[str]:
        width = max(len("original"), *(len(label) for label in self.labels)) + 1
        rows = [f"  {'original:'.ljust(width + 1)} {(stored or fmt)(summary.stored)}"]
        for label in self.labels:
            outcome = summary.outcomes[label]
            rows.append(f"  {(label + ':').ljust(width + 1)} {fmt(outcome)}")
        return rows

    def _value_table(self, title: str, summaries: list[RunSummary], fmt) -> list[str]:
        width = TITLE_WIDTH + (len(self.labels) + 1) * (VALUE_WIDTH + 1)
        columns = ["Original", *(label.capitalize() for label in self.labels)]
        lines = [
            "",
            bold(title),
            rule(width),
            bold(" ".join(["Title".ljust(TITLE_WIDTH), *(c.ljust(VALUE_WIDTH) for c in columns)])),
            rule(width),
        ]
        for summary in summaries:
            cells = [pad(fmt(summary.stored), VALUE_WIDTH)]
            cells.extend(pad(fmt(summary.outcomes[label]), VALUE_WIDTH) for label in self.labels)
            lines.append(" ".join([summary.title[:TITLE_WIDTH - 2].ljust(TITLE_WIDTH), *cells]))
        return lines

    def _tags_table(self, summaries: list[RunSummary]) -> list[str]:
        width = TITLE_WIDTH + VALUE_WIDTH + TAGS_WIDTH
        lines = [
            "",
            bold("📊 Tags Comparison"),
            rule(width),
            bold(f"{'Title'.ljust(TITLE_WIDTH)} {'Model'.ljust(VALUE_WIDTH)} {'Tags'.ljust(TAGS_WIDTH)}"),
            rule(width),
        ]
        for summary in summaries:
            title = summary.title[:TITLE_WIDTH - 2].ljust(TITLE_WIDTH)
            lines.append(f"{title} {'Original'.ljust(VALUE_WIDTH)} {format_tags(summary.stored.tags).ljust(TAGS_WIDTH)}")
            # Only models that disagree with stored tags get a row
            for label in self.labels:
                outcome: ModelOutcome = summary.outcomes[label]
                if outcome.tags != summary.stored.tags:
                    row = f"{''.ljust(TITLE_WIDTH)} {label.capitalize().ljust(VALUE_WIDTH)} {format_tags(outcome.tags).ljust(TAGS_WIDTH)}"
                    lines.append(typer.style(row, fg=typer.colors.CYAN))
            lines.append(rule(width))
        return lines
