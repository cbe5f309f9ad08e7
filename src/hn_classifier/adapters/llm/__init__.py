"""LLM adapters."""

from hn_classifier.adapters.llm.openai_client import OpenAIClient

__all__ = ["OpenAIClient"]
