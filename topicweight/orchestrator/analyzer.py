"""Analysis orchestrator — topic in, research allocation out."""

from __future__ import annotations

import logging
import math

from topicweight.backends.base import GroundTruthLookup, SearchProvider, StructuredGenerator
from topicweight.errors import GenerationError, ValidationError
from topicweight.models.analysis import AnalysisRequest, AnalysisResponse
from topicweight.models.category import CATEGORY_ORDER, Category
from topicweight.orchestrator.analysis_client import StructuredAnalysisClient
from topicweight.orchestrator.citations import CitationRegistry
from topicweight.orchestrator.enrichment import CategoryEnrichmentPipeline
from topicweight.orchestrator.hours import aggregate_hours
from topicweight.orchestrator.prompts import build_messages, requested_categories
from topicweight.orchestrator.resolver import FactSourceResolver

logger = logging.getLogger(__name__)

TOPIC_REQUIRED = "Topic input is required."
DAYS_REQUIRED = "Days per year must be a positive number."


def order_categories(categories: list[Category]) -> list[Category]:
    """Sort into the canonical display order.

    Names outside the display order are an illegal state and raise.
    """
    rank = {name: i for i, name in enumerate(CATEGORY_ORDER)}
    for category in categories:
        if category.name not in rank:
            raise GenerationError(f"Category {category.name!r} has no display position")
    return sorted(categories, key=lambda c: rank[c.name])


def build_analysis_context(description: str, categories: list[Category]) -> str:
    """Short summary used to seed a follow-up chat about the analysis."""
    lines = [description, "", "Category weights:"]
    lines.extend(f"- {c.name.value}: {c.weight:g}/10" for c in categories)
    return "\n".join(lines)


class AnalysisOrchestrator:
    """Runs the full pipeline for one request.

    Fresh per-request state (citation registry, resolver, enrichment
    pipeline) is built inside ``handle``; the orchestrator itself only
    holds the provider handles and is safe to share.
    """

    def __init__(
        self,
        generator: StructuredGenerator,
        search: SearchProvider,
        ground_truth: GroundTruthLookup | None = None,
        max_results: int | None = None,
    ) -> None:
        self.analysis_client = StructuredAnalysisClient(generator)
        self.search = search
        self.ground_truth = ground_truth
        self.max_results = max_results

    @staticmethod
    def validate(request: AnalysisRequest) -> None:
        if not request.topic or not request.topic.strip():
            raise ValidationError(TOPIC_REQUIRED)
        days = request.days_per_year
        if days is None or isinstance(days, bool) or days <= 0:
            raise ValidationError(DAYS_REQUIRED)
        if not math.isfinite(days) or not math.isfinite(days * 24):
            raise ValidationError(DAYS_REQUIRED)

    async def handle(self, request: AnalysisRequest) -> AnalysisResponse:
        self.validate(request)
        topic = request.topic.strip()
        logger.info("Analyzing topic %r (year=%s, days=%s)", topic, request.year, request.days_per_year)

        requested = requested_categories(request)
        try:
            categories = await self.analysis_client.generate(build_messages(request), requested)
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"Structured generation failed: {exc}") from exc

        categories = order_categories(categories)

        registry = CitationRegistry()
        pipeline = CategoryEnrichmentPipeline(
            FactSourceResolver(self.search, self.max_results),
            registry,
            self.ground_truth,
        )
        categories = await pipeline.enrich(categories, request.year)

        estimate = aggregate_hours(categories, request.days_per_year)
        logger.info(
            "Topic %r: %d categories, %d sources, %d hours",
            topic, len(categories), len(registry), estimate.total_hours,
        )

        return AnalysisResponse(
            categories=categories,
            total_hours=estimate.total_hours,
            total_hours_description=estimate.description,
            analysis_context=build_analysis_context(estimate.description, categories),
            sources=registry.export(),
        )
