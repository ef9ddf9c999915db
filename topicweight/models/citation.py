"""Citation reference-list entry."""

from __future__ import annotations

from dataclasses import dataclass

from topicweight.models.source import Source


@dataclass
class CitationEntry:
    """A numbered source in the final reference list."""

    citation_id: int
    source: Source
    context: str = ""

    def to_dict(self) -> dict:
        return {
            "citation": f"[{self.citation_id}]",
            "source": self.source.to_dict(),
            "context": self.context,
        }
