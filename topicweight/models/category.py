"""Category and fact data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from topicweight.models.source import Source


class CategoryName(str, Enum):
    STATISTICAL_IMPACT = "Statistical Impact"
    SOCIAL_RELEVANCE = "Social Relevance"
    POLICY_IMPACT_POTENTIAL = "Policy Impact Potential"
    PERSONAL_RELEVANCE = "Personal Relevance"


# Canonical display order for categories in a response
CATEGORY_ORDER: tuple[CategoryName, ...] = (
    CategoryName.STATISTICAL_IMPACT,
    CategoryName.SOCIAL_RELEVANCE,
    CategoryName.POLICY_IMPACT_POTENTIAL,
    CategoryName.PERSONAL_RELEVANCE,
)


@dataclass
class Fact:
    """A single atomic claim, used as a search query seed."""

    text: str
    sources: list[Source] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "sources": [s.to_dict() for s in self.sources],
        }


@dataclass
class Category:
    """One evaluated dimension of a political topic."""

    name: CategoryName
    weight: float
    reasoning: str
    facts: list[Fact] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "category": self.name.value,
            "weight": self.weight,
            "facts": [f.to_dict() for f in self.facts],
            "reasoning": self.reasoning,
        }
