"""Chat relay — follow-up questions about a finished analysis."""

from __future__ import annotations

from topicweight.backends.base import ChatProvider
from topicweight.errors import ProviderError, ValidationError

CHAT_SYSTEM_PROMPT = """\
You are a helpful assistant answering follow-up questions about a political \
topic analysis. Stay grounded in the analysis below, say so when a question \
goes beyond it, and keep answers concise.

Analysis:
{analysis_context}\
"""

ALLOWED_ROLES = {"user", "assistant"}
BAD_TURN = "Each conversation entry needs a user or assistant role and text content."


class ChatRelay:
    """Stateless proxy from a conversation to a chat-completion provider."""

    def __init__(self, provider: ChatProvider) -> None:
        self.provider = provider

    @staticmethod
    def validate(conversation, analysis_context) -> list[dict]:
        if not isinstance(conversation, list) or not conversation:
            raise ValidationError("Conversation must be a non-empty array.")
        if not isinstance(analysis_context, str) or not analysis_context.strip():
            raise ValidationError("Analysis context is required.")

        messages: list[dict] = []
        for turn in conversation:
            if not isinstance(turn, dict):
                raise ValidationError(BAD_TURN)
            role = turn.get("role")
            content = turn.get("content")
            if role not in ALLOWED_ROLES or not isinstance(content, str):
                raise ValidationError(BAD_TURN)
            messages.append({"role": role, "content": content})
        return messages

    async def reply(self, conversation, analysis_context) -> str:
        messages = self.validate(conversation, analysis_context)
        system = {
            "role": "system",
            "content": CHAT_SYSTEM_PROMPT.format(analysis_context=analysis_context),
        }
        try:
            return await self.provider.chat([system, *messages])
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(f"Chat provider failed: {exc}") from exc
