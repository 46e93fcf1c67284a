"""Factory function for creating LLM clients from configuration."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from nexus.llm.gemini import GEMINI_API_URL, GeminiClient
from nexus.llm.openai_compat import OpenAICompatibleClient

if TYPE_CHECKING:
    from nexus.config.schema import NexusConfig
    from nexus.llm.client import LLMClient

logger = logging.getLogger(__name__)


def create_llm_client(config: NexusConfig, model: str | None = None) -> LLMClient:
    """Create an LLM client based on configuration.

    Reads ``config.provider.backend`` and returns the matching client. The
    API key is taken from the environment variable named by
    ``config.provider.api_key_env``.

    Args:
        config: Nexus configuration.
        model: Override the configured model (used for the fallback model).

    Returns:
        An LLM client for the configured backend.

    Raises:
        ValueError: If the backend is not recognised or misconfigured.
    """
    provider = config.provider
    api_key = os.environ.get(provider.api_key_env, "")
    if not api_key:
        logger.warning(
            "Provider API key not found in %s; requests will fail and fall back",
            provider.api_key_env,
        )

    if provider.backend == "gemini":
        return GeminiClient(
            api_key=api_key,
            model=model or provider.model,
            base_url=provider.base_url or GEMINI_API_URL,
            timeout=provider.timeout,
            temperature=provider.temperature,
            top_k=provider.top_k,
            top_p=provider.top_p,
            max_output_tokens=provider.max_output_tokens,
        )
    elif provider.backend == "openai":
        if not provider.base_url:
            raise ValueError("provider.base_url is required for the openai backend")
        return OpenAICompatibleClient(
            model=model or provider.model,
            base_url=provider.base_url,
            api_key=api_key or "none",
            timeout=provider.timeout,
            temperature=provider.temperature,
            top_p=provider.top_p,
            max_output_tokens=provider.max_output_tokens,
        )
    else:
        raise ValueError(f"Unknown provider backend: {provider.backend}")
