"""Tests for the persisted chat API."""


def test_send_message(client):
    response = client.post("/api/chat", json={"userId": "kid-1", "message": "I feel sad"})

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == "kid-1"
    assert body["message"] == "I feel sad"
    assert body["response"] == "I hear you."
    assert body["timestamp"]


def test_send_message_validation(client):
    response = client.post("/api/chat", json={"message": "no user"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"]


def test_history(client):
    client.post("/api/chat", json={"userId": "kid-1", "message": "first"})
    client.post("/api/chat", json={"userId": "kid-1", "message": "second"})
    client.post("/api/chat", json={"userId": "kid-2", "message": "other"})

    response = client.get("/api/chat/history/kid-1")

    assert response.status_code == 200
    assert [r["message"] for r in response.json()] == ["second", "first"]


def test_delete_history(client):
    client.post("/api/chat", json={"userId": "kid-1", "message": "first"})

    response = client.request("DELETE", "/api/chat/history", json={"userId": "kid-1"})

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert client.get("/api/chat/history/kid-1").json() == []


def test_clear_alias(client):
    client.post("/api/chat", json={"userId": "kid-1", "message": "first"})

    response = client.post("/api/chat/clear", json={"userId": "kid-1"})

    assert response.status_code == 200
    assert client.get("/api/chat/history/kid-1").json() == []
