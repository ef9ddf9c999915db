"""Error taxonomy for the analysis pipeline."""

from __future__ import annotations


class TopicWeightError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(TopicWeightError):
    """A request field is missing or malformed.

    The message is user-facing and is returned verbatim with a 400.
    """


class GenerationError(TopicWeightError):
    """The structured-generation call produced no usable payload."""


class ProviderError(TopicWeightError):
    """The chat-completion provider failed."""


class EnrichmentDegradation(TopicWeightError):
    """A per-fact or per-source lookup failed; never surfaced to callers."""
