"""Report renderers."""

from hn_classifier.adapters.report.terminal_report import TerminalReport

__all__ = ["TerminalReport"]
