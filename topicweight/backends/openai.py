"""OpenAI backend — chat completions API via httpx."""

from __future__ import annotations

import json
import logging

import httpx

from topicweight.config import settings
from topicweight.errors import GenerationError, ProviderError

logger = logging.getLogger(__name__)

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIBackend:
    """Structured generation and chat against OpenAI's chat completions API."""

    name: str = "OpenAI"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        chat_model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.chat_model = chat_model or settings.chat_model
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: dict, timeout: float) -> dict:
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            response = await client.post(OPENAI_API_URL, headers=self._headers(), json=payload)
            response.raise_for_status()
        return response.json()

    async def generate_structured(
        self, messages: list[dict], schema_name: str, schema: dict
    ) -> dict:
        """Request a schema-constrained completion and return the parsed object.

        Exactly one outbound call, no retry.  Raises GenerationError when the
        provider fails, returns no choices, refuses, or returns content that
        is not a JSON object.
        """
        payload = {
            "model": self.model,
            "messages": messages,
            "response_format": {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "strict": True, "schema": schema},
            },
        }
        try:
            data = await self._post(payload, settings.generation_timeout)
        except (httpx.HTTPError, ValueError) as exc:
            raise GenerationError(f"Structured generation request failed: {exc}") from exc

        choices = data.get("choices") or []
        if not choices:
            raise GenerationError("Invalid response format from OpenAI: no choices")

        message = choices[0].get("message") or {}
        if message.get("refusal"):
            raise GenerationError(f"Model refused the request: {message['refusal']}")

        content = message.get("content")
        if not content:
            raise GenerationError("Invalid response format from OpenAI: empty content")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise GenerationError(f"Model returned invalid JSON: {exc}") from exc

        if not isinstance(parsed, dict):
            raise GenerationError("Model returned JSON that is not an object")

        logger.debug("Structured generation returned %d chars", len(content))
        return parsed

    async def chat(self, messages: list[dict]) -> str:
        """Plain chat completion; raises ProviderError on any failure."""
        payload = {"model": self.chat_model, "messages": messages}
        try:
            data = await self._post(payload, settings.chat_timeout)
            reply = data["choices"][0]["message"]["content"]
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderError(f"Chat completion failed: {exc}") from exc

        if not isinstance(reply, str):
            raise ProviderError("Chat completion returned no text")
        return reply
