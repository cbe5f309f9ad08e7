"""OpenAI API client for structured classification."""

from typing import Any, Optional

import httpx

from hn_classifier.config import Settings
from hn_classifier.core import ClassificationResult, LLMClient, LLMResponseError

CLASSIFICATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "isAiRelated": {
            "type": "boolean",
            "description": "Whether the content is AI/ML related",
        },
        "hypeMeter": {
            "type": "integer",
            "minimum": 1,
            "maximum": 10,
            "description": "Hype level from 1-10",
        },
        "tags": {
            "type": "array",
            "items": {"type": "string"},
            "maxItems": 3,
            "description": "Maximum 3 relevant tags",
        },
    },
    "required": ["isAiRelated", "hypeMeter", "tags"],
    "additionalProperties": False,
}


class OpenAIClient(LLMClient):
    """OpenAI Chat Completions client with JSON-schema responses."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.api_key = settings.openai_api_key
        self.model = settings.openai.model
        self.base_url = settings.openai.base_url.rstrip("/")
        self.timeout = settings.openai.timeout

    async def generate_classification(
        self, prompt: str, model: Optional[str] = None
    ) -> ClassificationResult:
        """Classify with a single request; no retry."""
        content = await self._call_api(prompt=prompt, model=model or self.model)
        return ClassificationResult.model_validate_json(content)

    async def _call_api(self, prompt: str, model: str) -> str:
        """POST the prompt and return the message content."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": model,
                    "messages": [
                        {"role": "user", "content": prompt},
                    ],
                    "response_format": {
                        "type": "json_schema",
                        "json_schema": {
                            "name": "classification",
                            "strict": True,
                            "schema": CLASSIFICATION_SCHEMA,
                        },
                    },
                },
            )
            response.raise_for_status()
            data = response.json()

        message = data["choices"][0]["message"]
        if message.get("refusal"):
            raise LLMResponseError(f"{model} refused: {message['refusal']}")
        content = message.get("content")
        if not content:
            raise LLMResponseError(f"{model} returned no content")
        return content
