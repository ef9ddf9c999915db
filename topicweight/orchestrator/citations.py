"""Citation registry — stable numbering for sources discovered during a request."""

from __future__ import annotations

from topicweight.models.citation import CitationEntry
from topicweight.models.source import Source


class CitationRegistry:
    """Assigns increasing citation ids to distinct source links.

    One registry lives for exactly one request.  It is not safe to call from
    concurrent branches; the enrichment pipeline feeds it in a single
    sequential pass after all lookups have finished.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._entries: list[CitationEntry] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._entries)

    def assign(self, source: Source, context: str = "") -> int | None:
        """Return the citation id for ``source``, creating one on first sight.

        Sources without a link are never numbered.  The id is also written
        onto ``source.citation_id``.
        """
        link = source.link.strip() if source.link else ""
        if not link:
            return None

        citation_id = self._ids.get(link)
        if citation_id is None:
            citation_id = self._next_id
            self._next_id += 1
            self._ids[link] = citation_id
            self._entries.append(CitationEntry(citation_id=citation_id, source=source, context=context))

        source.citation_id = citation_id
        return citation_id

    def export(self) -> list[CitationEntry]:
        """All numbered sources in ascending id order."""
        return sorted(self._entries, key=lambda e: e.citation_id)
