"""Google Gemini LLM client using httpx.

Implements the LLMClient protocol for the Gemini ``generateContent`` REST
API. Uses httpx directly rather than the google SDK so every backend shares
the same transport and error types.
"""

import logging
from typing import Any

import httpx

from nexus.llm.client import CompletionResponse, Message

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com"
GEMINI_API_VERSION = "v1beta"

_FINISH_REASONS = {
    "STOP": "stop",
    "MAX_TOKENS": "length",
    "SAFETY": "content_filter",
    "RECITATION": "content_filter",
}


class EmptyCompletionError(RuntimeError):
    """The provider answered without any usable candidate text."""


class GeminiClient:
    """LLM client for the Gemini generateContent API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-pro",
        base_url: str = GEMINI_API_URL,
        timeout: float = 30.0,
        temperature: float = 0.7,
        top_k: int = 40,
        top_p: float = 0.95,
        max_output_tokens: int = 1000,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name (e.g., "gemini-1.5-pro")
            base_url: API root, overridable for proxies and tests
            timeout: Request timeout in seconds
            temperature: Default sampling temperature
            top_k: Top-k sampling parameter
            top_p: Nucleus sampling parameter
            max_output_tokens: Default max tokens for responses
        """
        self.model = model
        self.temperature = temperature
        self.top_k = top_k
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens

        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "x-goog-api-key": api_key,
                "content-type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
        )

    def _convert_messages(
        self, messages: list[Message]
    ) -> tuple[str | None, list[dict[str, Any]]]:
        """Convert internal Message format to Gemini contents.

        Gemini names the assistant role ``model`` and takes the system
        prompt as a separate ``systemInstruction``.

        Args:
            messages: List of Message objects

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_instruction = None
        contents: list[dict[str, Any]] = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
                continue

            role = "model" if msg.role == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": msg.content}]})

        return system_instruction, contents

    def _parse_response(self, data: dict[str, Any]) -> CompletionResponse:
        """Extract candidate text from a generateContent response.

        Raises:
            EmptyCompletionError: If no candidate carries text
        """
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = data.get("promptFeedback", {}).get("blockReason", "unknown")
            raise EmptyCompletionError(f"Gemini returned no candidates (block reason: {block_reason})")

        candidate = candidates[0]
        parts = candidate.get("content", {}).get("parts", [])
        text = "".join(part.get("text", "") for part in parts)
        if not text.strip():
            raise EmptyCompletionError("Gemini returned an empty candidate")

        finish_reason = _FINISH_REASONS.get(candidate.get("finishReason", "STOP"), "stop")
        return CompletionResponse(content=text, finish_reason=finish_reason)

    async def complete(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResponse:
        """Generate a completion from Gemini.

        A single user message is a one-shot ``generateContent`` call; longer
        lists are sent as a chat transcript.

        Args:
            messages: Conversation history
            temperature: Sampling temperature override
            max_tokens: Maximum tokens to generate

        Returns:
            CompletionResponse with the generated text
        """
        system_instruction, contents = self._convert_messages(messages)

        payload: dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": temperature if temperature is not None else self.temperature,
                "topK": self.top_k,
                "topP": self.top_p,
                "maxOutputTokens": max_tokens or self.max_output_tokens,
            },
        }

        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        logger.debug("Gemini request: model=%s contents=%d", self.model, len(contents))
        response = await self.client.post(
            f"/{GEMINI_API_VERSION}/models/{self.model}:generateContent",
            json=payload,
        )
        response.raise_for_status()

        return self._parse_response(response.json())

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
