"""Nexus - backend for an AI wellness companion.

Nexus serves a conversational companion (text chat and a voice/video chat
with short-lived sessions), emotion detection for free text, and simple
tracking of moods, daily check-ins and guided exercises.

Key modules:

- :mod:`nexus.conversation` - Prompt builder, session store, voice/chat services, emotion classifier
- :mod:`nexus.llm` - LLM client abstraction (Gemini, OpenAI-compatible) and the retrying AI provider
- :mod:`nexus.storage` - SQLite persistence for moods, check-ins, chats and exercises
- :mod:`nexus.server` - FastAPI application and routes
- :mod:`nexus.config` - YAML configuration with pydantic validation
"""

__version__ = "0.2.0"
