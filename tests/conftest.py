"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from nexus.config.schema import NexusConfig
from nexus.llm.client import CompletionResponse
from nexus.storage import Database


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep host environment overrides out of config-dependent tests."""
    for name in ("PORT", "NEXUS_CONFIG", "NEXUS_DATABASE_PATH", "NEXUS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def default_config() -> NexusConfig:
    """Provide a default configuration for tests."""
    return NexusConfig()


@pytest.fixture
def test_config(tmp_path) -> NexusConfig:
    """Configuration with a temp database and no retry delay."""
    config = NexusConfig()
    config.database.path = str(tmp_path / "nexus.db")
    config.retry.delay_seconds = 0
    config.provider.fallback_model = None
    return config


@pytest.fixture
def db(tmp_path) -> Database:
    """A fresh SQLite database in a temp directory."""
    return Database(tmp_path / "nexus.db")


@pytest.fixture
def mock_llm():
    """An LLM client whose completions always return a fixed reply."""
    llm = MagicMock()
    llm.model = "test-model"
    llm.complete = AsyncMock(return_value=CompletionResponse(content="I hear you."))
    llm.close = AsyncMock()
    return llm


@pytest.fixture
def failing_llm():
    """An LLM client whose completions always fail."""
    llm = MagicMock()
    llm.model = "test-model"
    llm.complete = AsyncMock(side_effect=ConnectionError("upstream down"))
    llm.close = AsyncMock()
    return llm
