"""LLM client abstraction and the retrying AI provider."""

from nexus.llm.client import CompletionResponse, LLMClient, Message
from nexus.llm.factory import create_llm_client
from nexus.llm.provider import AIProvider, Reply

__all__ = [
    "AIProvider",
    "CompletionResponse",
    "LLMClient",
    "Message",
    "Reply",
    "create_llm_client",
]
