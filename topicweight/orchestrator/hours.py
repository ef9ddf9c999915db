"""Hours aggregator — turns category weights into one research-hours figure.

Pure and deterministic: no I/O, no randomness.

    available  = days_per_year * 24
    modifier   = 1 + personal_relevance_weight / 10   (1 when absent)
    average    = mean of every category weight, Personal Relevance included
    total      = round((average / 10) * (available / 5) * modifier)

Rounding is half-up so that ``x.5`` always rounds away from zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from topicweight.models.category import Category, CategoryName

# Share of the available hours that a maximum-weight topic earns
AVAILABLE_HOURS_DIVISOR = 5


@dataclass(frozen=True)
class HoursEstimate:
    total_hours: int
    description: str
    average_weight: float
    relevance_modifier: float
    total_available_hours: float


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _fmt(value: float) -> str:
    return f"{round(value, 2):g}"


def relevance_modifier(categories: list[Category]) -> float:
    """1 + weight/10 for the first Personal Relevance category, else 1."""
    for category in categories:
        if category.name == CategoryName.PERSONAL_RELEVANCE:
            return 1 + category.weight / 10
    return 1.0


def aggregate_hours(categories: list[Category], days_per_year: float) -> HoursEstimate:
    if not categories:
        raise ValueError("At least one category is required to aggregate hours")
    if days_per_year < 0:
        raise ValueError("days_per_year must not be negative")

    total_available = days_per_year * 24
    modifier = relevance_modifier(categories)
    average = sum(c.weight for c in categories) / len(categories)

    total = _round_half_up(
        (average / 10) * (total_available / AVAILABLE_HOURS_DIVISOR) * modifier
    )

    modifier_clause = f" × personal relevance modifier {_fmt(modifier)}" if modifier > 1 else ""
    description = (
        f"{total} hours = round(({average:.1f} average weight across "
        f"{len(categories)} categories / 10) × ({_fmt(total_available)} available hours / "
        f"{AVAILABLE_HOURS_DIVISOR}){modifier_clause}). "
        f"Available hours are {_fmt(days_per_year)} days × 24 hours."
    )

    return HoursEstimate(
        total_hours=total,
        description=description,
        average_weight=average,
        relevance_modifier=modifier,
        total_available_hours=total_available,
    )
