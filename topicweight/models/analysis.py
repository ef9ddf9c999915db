"""Analysis request and response data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from topicweight.models.category import Category
from topicweight.models.citation import CitationEntry


class BiasPreference(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    NEUTRAL = "neutral"


@dataclass
class AnalysisRequest:
    """A topic plus the user's preferences for how to weigh it."""

    topic: str | None
    days_per_year: float | None = None
    personal_impact: str | None = None
    bias_preference: BiasPreference | None = None
    year: int | None = None

    @property
    def has_personal_impact(self) -> bool:
        return bool(self.personal_impact and self.personal_impact.strip())


@dataclass
class AnalysisResponse:
    """The research allocation returned for a topic."""

    categories: list[Category]
    total_hours: int
    total_hours_description: str
    analysis_context: str
    sources: list[CitationEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "weights": [c.to_dict() for c in self.categories],
            "totalHours": self.total_hours,
            "totalHoursDescription": self.total_hours_description,
            "analysisContext": self.analysis_context,
            "sources": [s.to_dict() for s in self.sources],
        }
