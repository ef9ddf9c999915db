"""Ground News backend — news-context lookup by article URL."""

from __future__ import annotations

import logging

import httpx

from topicweight.backends.base import GroundTruthLookup
from topicweight.config import settings

logger = logging.getLogger(__name__)

GROUND_NEWS_API_URL = "https://web-api-cdn.ground.news/api/public/search/url"
GROUND_NEWS_INTEREST_URL = "https://ground.news/interest/{slug}"


class NullGroundTruth:
    """Disabled lookup: always returns an empty link, never touches the network."""

    async def lookup(self, url: str) -> str:
        return ""


class GroundNewsLookup:
    """Resolve an article URL to its Ground News interest page."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def lookup(self, url: str) -> str:
        """Return the interest link for ``url``, or ``""`` on a miss or any failure."""
        try:
            async with httpx.AsyncClient(
                timeout=settings.ground_news_timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    GROUND_NEWS_API_URL,
                    headers={"Content-Type": "application/json", "User-Agent": "topicweight"},
                    json={"url": url},
                )
                response.raise_for_status()
            interest = response.json().get("interest") or {}
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.warning("Ground News lookup failed for %s: %s", url, exc)
            return ""

        slug = interest.get("slug") if isinstance(interest, dict) else None
        return GROUND_NEWS_INTEREST_URL.format(slug=slug) if slug else ""


def build_ground_truth(enabled: bool | None = None) -> GroundTruthLookup:
    """Pick the live or no-op lookup from configuration."""
    if enabled is None:
        enabled = settings.ground_news_enabled
    return GroundNewsLookup() if enabled else NullGroundTruth()
