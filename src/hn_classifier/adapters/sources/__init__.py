"""Source adapters for fetching items."""

from hn_classifier.adapters.sources.hn_api_source import HackerNewsSource

__all__ = ["HackerNewsSource"]
