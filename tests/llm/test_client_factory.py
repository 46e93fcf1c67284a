"""Tests for LLM client factory and the OpenAI-compatible backend."""

import json

import pytest
import respx
from httpx import Response

from nexus.config.schema import NexusConfig
from nexus.llm.client import Message
from nexus.llm.factory import create_llm_client
from nexus.llm.gemini import GeminiClient
from nexus.llm.openai_compat import OpenAICompatibleClient


def test_default_backend_is_gemini(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")

    client = create_llm_client(NexusConfig())

    assert isinstance(client, GeminiClient)
    assert client.model == "gemini-1.5-pro"
    assert client.client.headers["x-goog-api-key"] == "secret"


def test_model_override_for_fallback(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")

    client = create_llm_client(NexusConfig(), model="gemini-1.0-pro")

    assert client.model == "gemini-1.0-pro"


def test_key_read_from_configured_env_var(monkeypatch):
    monkeypatch.setenv("MY_KEY", "from-custom-var")
    config = NexusConfig()
    config.provider.api_key_env = "MY_KEY"

    client = create_llm_client(config)

    assert client.client.headers["x-goog-api-key"] == "from-custom-var"


def test_missing_key_logs_warning(monkeypatch, caplog):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with caplog.at_level("WARNING"):
        create_llm_client(NexusConfig())

    assert "GEMINI_API_KEY" in caplog.text


def test_openai_backend():
    config = NexusConfig()
    config.provider.backend = "openai"
    config.provider.model = "llama3:8b"
    config.provider.base_url = "http://localhost:11434/v1"

    client = create_llm_client(config)

    assert isinstance(client, OpenAICompatibleClient)
    assert client.model == "llama3:8b"


def test_openai_backend_requires_base_url():
    config = NexusConfig()
    config.provider.backend = "openai"

    with pytest.raises(ValueError, match="base_url"):
        create_llm_client(config)


@pytest.mark.asyncio
@respx.mock
async def test_openai_compatible_complete():
    """Test completion through the OpenAI SDK against a mocked endpoint."""
    route = respx.post("http://localhost:11434/v1/chat/completions").mock(
        return_value=Response(
            200,
            json={
                "id": "chatcmpl-123",
                "object": "chat.completion",
                "created": 1677652288,
                "model": "llama3:8b",
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": "I understand."},
                        "finish_reason": "stop",
                    }
                ],
            },
        )
    )
    client = OpenAICompatibleClient(model="llama3:8b", base_url="http://localhost:11434/v1")

    response = await client.complete([Message(role="user", content="I feel low")])

    assert response.content == "I understand."
    assert response.finish_reason == "stop"
    body = json.loads(route.calls.last.request.content)
    assert body["messages"] == [{"role": "user", "content": "I feel low"}]
    assert body["max_tokens"] == 1000
    await client.close()


@pytest.mark.asyncio
@respx.mock
async def test_openai_compatible_empty_reply_raises():
    respx.post("http://localhost:11434/v1/chat/completions").mock(
        return_value=Response(
            200,
            json={
                "id": "chatcmpl-123",
                "object": "chat.completion",
                "created": 1677652288,
                "model": "llama3:8b",
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": ""},
                        "finish_reason": "stop",
                    }
                ],
            },
        )
    )
    client = OpenAICompatibleClient(model="llama3:8b", base_url="http://localhost:11434/v1")

    with pytest.raises(ValueError, match="Empty completion"):
        await client.complete([Message(role="user", content="hi")])
    await client.close()
