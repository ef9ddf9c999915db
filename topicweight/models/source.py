"""Source data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Source:
    """An external reference discovered by a search lookup for a fact."""

    title: str
    link: str
    snippet: str = ""
    citation_id: int | None = None
    ground_news_link: str = ""

    @property
    def citation(self) -> str | None:
        """Display form of the citation id, e.g. ``[3]``."""
        if self.citation_id is None:
            return None
        return f"[{self.citation_id}]"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "link": self.link,
            "snippet": self.snippet,
            "citation": self.citation,
            "groundNewsLink": self.ground_news_link,
        }
