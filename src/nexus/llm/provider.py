"""Retrying reply generation on top of an LLM client.

``AIProvider`` is the only thing the conversation layer talks to. It turns a
user message plus optional role-tagged history into reply text, retries
transient failures with a linearly growing delay, optionally tries a
fallback model, and finally degrades to a canned supportive message. Upstream
errors never escape :meth:`AIProvider.generate_reply`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from nexus.config.schema import DEFAULT_FALLBACK_MESSAGE
from nexus.llm.client import LLMClient, Message
from nexus.llm.factory import create_llm_client

if TYPE_CHECKING:
    from nexus.config.schema import NexusConfig

logger = logging.getLogger(__name__)


@dataclass
class Reply:
    """Outcome of a generate_reply call.

    ``attempts`` counts every upstream call, including the fallback model's.
    """

    text: str
    succeeded: bool
    attempts: int = 0


def _to_messages(history: Sequence[Any] | None) -> list[Message]:
    """Normalise dicts, Messages and conversation turns into Messages.

    Accepts the Gemini role name ``model`` as an alias for ``assistant``.
    Items without a role or content are skipped.
    """
    messages: list[Message] = []
    for item in history or []:
        if isinstance(item, Mapping):
            role, content = item.get("role"), item.get("content")
        else:
            role, content = getattr(item, "role", None), getattr(item, "content", None)
        if role is None or content is None:
            logger.warning("Skipping malformed history item: %r", item)
            continue
        role = str(role)
        if role == "model":
            role = "assistant"
        messages.append(Message(role=role, content=str(content)))
    return messages


class AIProvider:
    """Reply generator with bounded retries and a soft-failure fallback."""

    def __init__(
        self,
        client: LLMClient,
        *,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        timeout: float | None = 30.0,
        fallback_client: LLMClient | None = None,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ):
        """Initialize the provider.

        Args:
            client: Primary LLM client
            max_attempts: Attempts against the primary client
            retry_delay: Base delay; after failed attempt n the provider waits n * retry_delay
            timeout: Deadline for a single attempt in seconds (None disables it)
            fallback_client: Optional client tried once after the primary is exhausted
            fallback_message: Text returned when every attempt failed
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = client
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.fallback_client = fallback_client
        self.fallback_message = fallback_message

    @classmethod
    def from_config(cls, config: NexusConfig, client: LLMClient | None = None) -> AIProvider:
        """Build a provider from configuration.

        The fallback model client is only created when the primary client is
        also built from configuration.
        """
        fallback_client = None
        if client is None:
            client = create_llm_client(config)
            fallback_model = config.provider.fallback_model
            if fallback_model and fallback_model != config.provider.model:
                fallback_client = create_llm_client(config, model=fallback_model)

        return cls(
            client,
            max_attempts=config.retry.max_attempts,
            retry_delay=config.retry.delay_seconds,
            timeout=config.provider.timeout,
            fallback_client=fallback_client,
            fallback_message=config.chat.fallback_message,
        )

    @property
    def model(self) -> str:
        return getattr(self.client, "model", "unknown")

    async def _attempt(self, client: LLMClient, messages: list[Message]) -> str:
        response = await asyncio.wait_for(client.complete(messages), timeout=self.timeout)
        return response.content

    async def generate_reply(self, message: str, history: Sequence[Any] | None = None) -> Reply:
        """Generate a reply to ``message``.

        With an empty history a single-turn request is sent; otherwise the
        history seeds a multi-turn request that ends with ``message``.

        Args:
            message: Text to answer
            history: Prior turns as dicts, Messages or ConversationTurns

        Returns:
            Reply with ``succeeded=False`` and the canned text if every attempt failed
        """
        messages = _to_messages(history)
        messages.append(Message(role="user", content=message))

        logger.info(
            "Sending request to AI provider: message_length=%d history_length=%d",
            len(message),
            len(messages) - 1,
        )

        for attempt in range(1, self.max_attempts + 1):
            try:
                text = await self._attempt(self.client, messages)
            except Exception as e:
                logger.warning(
                    "AI provider attempt %d/%d failed: %s",
                    attempt,
                    self.max_attempts,
                    str(e) or type(e).__name__,
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(attempt * self.retry_delay)
                continue

            logger.info("AI provider reply generated: response_length=%d attempt=%d", len(text), attempt)
            return Reply(text=text, succeeded=True, attempts=attempt)

        attempts = self.max_attempts
        if self.fallback_client is not None:
            attempts += 1
            logger.info("Attempting fallback model %s", getattr(self.fallback_client, "model", "?"))
            try:
                text = await self._attempt(
                    self.fallback_client, [Message(role="user", content=message)]
                )
            except Exception as e:
                logger.error("Fallback model also failed: %s", str(e) or type(e).__name__)
            else:
                logger.info("Fallback model reply generated: response_length=%d", len(text))
                return Reply(text=text, succeeded=True, attempts=attempts)

        logger.error("AI provider unavailable after %d attempts; returning canned reply", attempts)
        return Reply(text=self.fallback_message, succeeded=False, attempts=attempts)

    async def close(self) -> None:
        """Close the primary and fallback clients."""
        await self.client.close()
        if self.fallback_client is not None:
            await self.fallback_client.close()
