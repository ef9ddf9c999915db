"""Protocols for the external providers the pipeline talks to."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StructuredGenerator(Protocol):
    """A language model that returns JSON constrained by a schema."""

    async def generate_structured(
        self, messages: list[dict], schema_name: str, schema: dict
    ) -> dict:
        """Send one request and return the decoded JSON object."""
        ...


@runtime_checkable
class ChatProvider(Protocol):
    """A plain chat-completion model."""

    async def chat(self, messages: list[dict]) -> str:
        ...


@runtime_checkable
class SearchProvider(Protocol):
    """A web search index returning ranked ``{title, link, snippet}`` dicts."""

    name: str

    async def search(self, query: str) -> list[dict]:
        ...


@runtime_checkable
class GroundTruthLookup(Protocol):
    """Optional news-context lookup keyed by article URL."""

    async def lookup(self, url: str) -> str:
        """Return a context link for ``url``, or ``""`` when there is none."""
        ...
