"""Category enrichment — fans fact lookups out and numbers the sources found."""

from __future__ import annotations

import asyncio
import logging

from topicweight.backends.base import GroundTruthLookup
from topicweight.backends.ground_news import NullGroundTruth
from topicweight.models.category import Category, Fact
from topicweight.models.source import Source
from topicweight.orchestrator.citations import CitationRegistry
from topicweight.orchestrator.resolver import FactSourceResolver

logger = logging.getLogger(__name__)


class CategoryEnrichmentPipeline:
    """Attach sources to every fact of every category, then cite them.

    All lookups for a request run concurrently.  Results are zipped back by
    position, so output order never depends on which lookup finished first.
    Citation ids are handed out afterwards in one sequential pass over
    categories, facts and sources.
    """

    def __init__(
        self,
        resolver: FactSourceResolver,
        registry: CitationRegistry,
        ground_truth: GroundTruthLookup | None = None,
    ) -> None:
        self.resolver = resolver
        self.registry = registry
        self.ground_truth = ground_truth or NullGroundTruth()

    async def enrich(self, categories: list[Category], year: int | None = None) -> list[Category]:
        enriched = list(
            await asyncio.gather(*[self._enrich_category(c, year) for c in categories])
        )

        await self._attach_ground_truth(enriched)
        self._assign_citations(enriched)

        logger.info(
            "Enriched %d categories with %d distinct sources",
            len(enriched), len(self.registry),
        )
        return enriched

    async def _enrich_category(self, category: Category, year: int | None) -> Category:
        results = await asyncio.gather(
            *[self.resolver.resolve(fact.text, year) for fact in category.facts]
        )
        facts = [
            Fact(text=fact.text, sources=sources)
            for fact, sources in zip(category.facts, results)
        ]
        return Category(
            name=category.name,
            weight=category.weight,
            reasoning=category.reasoning,
            facts=facts,
        )

    async def _attach_ground_truth(self, categories: list[Category]) -> None:
        """Look each distinct link up once and copy the result onto every source."""
        by_link: dict[str, list[Source]] = {}
        for source in _iter_sources(categories):
            if source.link:
                by_link.setdefault(source.link, []).append(source)
        if not by_link:
            return

        links = list(by_link)
        outcomes = await asyncio.gather(
            *[self.ground_truth.lookup(link) for link in links],
            return_exceptions=True,
        )
        for link, outcome in zip(links, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Ground truth lookup failed for %s: %s", link, outcome)
                continue
            for source in by_link[link]:
                source.ground_news_link = outcome or ""

    def _assign_citations(self, categories: list[Category]) -> None:
        for category in categories:
            for fact in category.facts:
                for source in fact.sources:
                    self.registry.assign(source, context=fact.text)


def _iter_sources(categories: list[Category]):
    for category in categories:
        for fact in category.facts:
            yield from fact.sources
