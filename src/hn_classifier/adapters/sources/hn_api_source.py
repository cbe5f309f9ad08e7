"""Hacker News Firebase API source."""

from typing import Any, Optional

import httpx

from hn_classifier.core import ItemSource


class HackerNewsSource(ItemSource):
    """Read stories and comments from the public HN API."""

    def __init__(
        self,
        api_base: str = "https://hacker-news.firebaseio.com/v0",
        timeout: float = 30.0,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    def item_url(self, item_id: int) -> str:
        return f"{self.api_base}/item/{item_id}.json"

    async def fetch_item(self, item_id: int) -> Optional[dict[str, Any]]:
        """Fetch item JSON. The API answers ``null`` for unknown ids."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.item_url(item_id))
            response.raise_for_status()
            return response.json()
