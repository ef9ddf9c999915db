"""Fact source resolver — turns a fact into a short list of candidate sources."""

from __future__ import annotations

import logging

from topicweight.backends.base import SearchProvider
from topicweight.config import settings
from topicweight.models.source import Source

logger = logging.getLogger(__name__)


class FactSourceResolver:
    """Looks up supporting sources for one fact at a time.

    Lookups never raise: a failed search is logged and yields no sources, so
    one bad fact cannot abort a batch.
    """

    def __init__(self, search: SearchProvider, max_results: int | None = None) -> None:
        self.search = search
        self.max_results = max_results or settings.search_results_per_fact

    @staticmethod
    def build_query(fact: str, year: int | None = None) -> str:
        return f"{fact} {year}" if year else fact

    async def resolve(self, fact: str, year: int | None = None) -> list[Source]:
        query = self.build_query(fact, year)
        try:
            results = await self.search.search(query)
        except Exception as exc:
            logger.warning("Source lookup via %s failed for %r: %s", self.search.name, query, exc)
            return []

        sources: list[Source] = []
        for item in results:
            if len(sources) >= self.max_results:
                break
            sources.append(
                Source(
                    title=item.get("title") or "",
                    link=item.get("link") or "",
                    snippet=item.get("snippet") or "",
                )
            )
        return sources
