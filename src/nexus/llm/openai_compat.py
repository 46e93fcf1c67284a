"""Client for OpenAI-compatible chat completion endpoints."""

from typing import Any

from openai import AsyncOpenAI

from nexus.llm.client import CompletionResponse, Message


class OpenAICompatibleClient:
    """LLM client for any OpenAI-compatible inference server.

    OpenAI itself, Ollama, vLLM and llama.cpp all expose
    ``/v1/chat/completions``, so a single client covers every self-hosted
    alternative to Gemini.
    """

    def __init__(
        self,
        model: str,
        base_url: str,
        api_key: str = "none",
        timeout: float = 30.0,
        temperature: float = 0.7,
        top_p: float = 0.95,
        max_output_tokens: int = 1000,
    ) -> None:
        """Initialise the client.

        Args:
            model: Model name served by the backend.
            base_url: OpenAI-compatible endpoint (must include ``/v1``).
            api_key: API key (many backends ignore this but the SDK requires one).
            timeout: Request timeout in seconds.
            temperature: Default sampling temperature.
            top_p: Nucleus sampling parameter.
            max_output_tokens: Default max tokens for responses.
        """
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens
        # Retries are owned by AIProvider
        self.client = AsyncOpenAI(
            base_url=base_url, api_key=api_key, timeout=timeout, max_retries=0
        )

    def _convert_messages(self, messages: list[Message]) -> list[dict[str, Any]]:
        """Convert internal Message format to OpenAI format."""
        return [{"role": msg.role, "content": msg.content} for msg in messages]

    async def complete(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResponse:
        """Generate a completion.

        Args:
            messages: Conversation history.
            temperature: Sampling temperature override.
            max_tokens: Maximum tokens to generate.

        Returns:
            CompletionResponse with the generated text.
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=self._convert_messages(messages),  # type: ignore[arg-type]
            temperature=temperature if temperature is not None else self.temperature,
            top_p=self.top_p,
            max_tokens=max_tokens or self.max_output_tokens,
        )

        if not response.choices or not response.choices[0].message.content:
            raise ValueError("Empty completion from OpenAI-compatible endpoint")

        choice = response.choices[0]
        return CompletionResponse(
            content=choice.message.content,
            finish_reason=choice.finish_reason or "stop",
        )

    async def close(self) -> None:
        """Close the underlying SDK client."""
        await self.client.close()
