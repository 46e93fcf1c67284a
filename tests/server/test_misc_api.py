"""Tests for health, expression, exercise routes and cross-cutting middleware."""

import json

import pytest
from fastapi.testclient import TestClient

from nexus.llm.client import CompletionResponse
from nexus.server.app import create_app
from nexus.storage.seed import DEFAULT_EXERCISES


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["model"] == "test-model"
    assert body["version"]


class TestExpression:
    def test_detect(self, client, mock_llm):
        mock_llm.complete.return_value = CompletionResponse(
            content=json.dumps({"emotion": "sad", "confidence": 0.8})
        )

        response = client.post("/api/expression/detect", json={"text": "I lost my dog"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "emotion": "sad", "confidence": 0.8}

    def test_detect_unparseable_reply_is_neutral(self, client):
        response = client.post("/api/expression/detect", json={"text": "hello"})

        body = response.json()
        assert body["emotion"] == "neutral"
        assert body["confidence"] == 0.5
        assert body["details"] == "Could not parse emotion from response"

    @pytest.mark.parametrize(
        "payload",
        [{}, {"text": ""}, {"text": "   "}, {"text": 123}, {"text": None}, {"text": ["hi"]}],
    )
    def test_detect_requires_text(self, client, payload):
        response = client.post("/api/expression/detect", json=payload)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Text input is required"}

    def test_liveness(self, client):
        response = client.get("/api/expression/test")
        assert response.json() == {"message": "Expression API is working"}


class TestExercises:
    def test_list_filters(self, client, services):
        services.exercises.seed(DEFAULT_EXERCISES)

        response = client.get("/api/exercises", params={"category": "sadness", "duration": 15})

        assert response.status_code == 200
        titles = [e["title"] for e in response.json()["data"]]
        assert titles == ["Gratitude List"]

    def test_list_rejects_unknown_difficulty(self, client):
        assert client.get("/api/exercises", params={"difficulty": "expert"}).status_code == 400

    def test_random(self, client, services):
        services.exercises.seed(DEFAULT_EXERCISES)

        response = client.get("/api/exercises/random", params={"category": "anxiety"})

        assert response.json()["data"]["title"] == "Mindfulness Meditation"

    def test_random_none_available(self, client):
        response = client.get("/api/exercises/random")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Exercise not found"}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["status"] == "error"


def test_rate_limit(test_config, mock_llm):
    test_config.rate_limit.chat_per_window = 2
    app = create_app(test_config, llm_client=mock_llm)

    with TestClient(app) as client:
        statuses = [client.get("/api/exercises").status_code for _ in range(3)]
        response = client.get("/api/exercises")

    assert statuses == [200, 200, 429]
    assert response.json() == {
        "status": "error",
        "message": "Too many requests, please try again later.",
    }


def test_ai_rate_limit_is_separate(test_config, mock_llm):
    test_config.rate_limit.chat_per_window = 1
    test_config.rate_limit.ai_per_window = 1
    app = create_app(test_config, llm_client=mock_llm)

    with TestClient(app) as client:
        assert client.get("/api/exercises").status_code == 200
        assert client.post("/api/expression/detect", json={"text": "hi"}).status_code == 200
        response = client.post("/api/expression/detect", json={"text": "hi"})

    assert response.status_code == 429
    assert response.json()["message"] == "Too many AI requests, please try again later."


def test_unexpected_error_is_500(app, services, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(services.moods, "latest", boom)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/moods/latest")

    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "Internal server error"}
