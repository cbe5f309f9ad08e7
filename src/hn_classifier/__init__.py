"""Hacker News post classification tasks, flow wiring and replay tooling."""

__version__ = "0.1.0"
