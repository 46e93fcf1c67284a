"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from nexus.server.app import create_app


@pytest.fixture
def app(test_config, mock_llm):
    """App wired to a temp database and a mocked LLM, with rate limits off."""
    test_config.rate_limit.enabled = False
    return create_app(test_config, llm_client=mock_llm)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def services(app):
    return app.state.services
