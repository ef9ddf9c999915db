"""Serper backend — Google web search via google.serper.dev."""

from __future__ import annotations

import httpx

from topicweight.config import settings
from topicweight.errors import EnrichmentDegradation

SERPER_API_URL = "https://google.serper.dev/search"


class SerperSearch:
    """Keyword search returning ranked organic results."""

    name: str = "Serper"

    def __init__(
        self,
        api_key: str | None = None,
        num_results: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.serper_api_key
        self.num_results = num_results or settings.search_results_per_fact
        self._transport = transport

    async def search(self, query: str) -> list[dict]:
        """Run a search and return ``{title, link, snippet}`` dicts in rank order."""
        async with httpx.AsyncClient(
            timeout=settings.search_timeout, transport=self._transport
        ) as client:
            response = await client.post(
                SERPER_API_URL,
                headers={"X-API-KEY": self.api_key, "Content-Type": "application/json"},
                json={"q": query, "num": self.num_results},
            )
            response.raise_for_status()

        data = response.json()
        organic = data.get("organic")
        if organic is None:
            raise EnrichmentDegradation(f"Serper response has no organic results for {query!r}")

        return [
            {
                "title": item.get("title") or "",
                "link": item.get("link") or "",
                "snippet": item.get("snippet") or "",
            }
            for item in organic
        ]
