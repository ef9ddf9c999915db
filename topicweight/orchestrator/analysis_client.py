"""Structured analysis client — one schema-constrained generation per request."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from topicweight.backends.base import StructuredGenerator
from topicweight.errors import GenerationError
from topicweight.models.category import Category, CategoryName, Fact
from topicweight.orchestrator.prompts import ANALYSIS_SCHEMA, ANALYSIS_SCHEMA_NAME

logger = logging.getLogger(__name__)


class GeneratedCategory(BaseModel):
    category: str
    weight: float = Field(ge=1, le=10)
    facts: list[str]
    reasoning: str = Field(min_length=1)


class GeneratedAnalysis(BaseModel):
    data: list[GeneratedCategory]


class StructuredAnalysisClient:
    """Requests category weights and facts and checks what comes back.

    The generator's output is treated as syntactically valid at best: names
    outside the closed category set are rejected, duplicates keep their
    first occurrence, and Personal Relevance never carries facts.
    """

    def __init__(self, generator: StructuredGenerator) -> None:
        self.generator = generator

    async def generate(
        self, messages: list[dict], requested: list[CategoryName]
    ) -> list[Category]:
        raw = await self.generator.generate_structured(
            messages, ANALYSIS_SCHEMA_NAME, ANALYSIS_SCHEMA
        )
        try:
            parsed = GeneratedAnalysis.model_validate(raw)
        except PydanticValidationError as exc:
            raise GenerationError(f"Generated payload failed schema validation: {exc}") from exc

        return self._to_categories(parsed, requested)

    def _to_categories(
        self, parsed: GeneratedAnalysis, requested: list[CategoryName]
    ) -> list[Category]:
        categories: list[Category] = []
        seen: set[CategoryName] = set()

        for item in parsed.data:
            try:
                name = CategoryName(item.category.strip())
            except ValueError:
                raise GenerationError(f"Unknown category returned: {item.category!r}") from None

            if name not in requested:
                logger.warning("Dropping unrequested category %s", name.value)
                continue
            if name in seen:
                logger.warning("Dropping duplicate category %s", name.value)
                continue
            seen.add(name)

            reasoning = item.reasoning.strip()
            if not reasoning:
                raise GenerationError(f"Blank reasoning returned for {name.value}")

            facts = [Fact(text=f.strip()) for f in item.facts if f.strip()]
            if name == CategoryName.PERSONAL_RELEVANCE and facts:
                logger.warning("Discarding %d facts returned for Personal Relevance", len(facts))
                facts = []

            categories.append(
                Category(
                    name=name,
                    weight=item.weight,
                    reasoning=reasoning,
                    facts=facts,
                )
            )

        if not categories:
            raise GenerationError("Generated payload contained no usable categories")
        return categories
