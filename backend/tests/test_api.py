"""
HTTP API tests.
Run the FastAPI app against temporary storage and a mocked completion provider.
"""

import pytest
from fastapi.testclient import TestClient

from foxie.api.deps import get_blob_store, get_document_store, get_llm_provider
from foxie.config import settings
from foxie.core.notes_sync import NOTES_COLLECTION
from foxie.llm.base import LLMProviderError
from foxie.main import app
from foxie.utils.auth import create_access_token


@pytest.fixture
def client(document_store, blob_store, llm_provider):
    app.dependency_overrides[get_document_store] = lambda: document_store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_llm_provider] = lambda: llm_provider
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create(client, user_id="u1"):
    resp = client.post("/sessions", json={"userId": user_id})
    assert resp.status_code == 201
    return resp.json()


class TestServiceEndpoints:
    """Tests for metadata endpoints."""

    def test_root(self, client):
        data = client.get("/").json()
        assert data["status"] == "running"
        assert data["app"] == settings.app_name

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestSessionEndpoints:
    """Tests for the /sessions routes."""

    def test_create_session(self, client):
        data = _create(client)
        assert data["name"] == "New Session"
        assert data["messages"] == []
        assert data["isFirstEverSession"] is True
        assert "createdAt" in data and "updatedAt" in data

    def test_create_requires_user_id(self, client):
        resp = client.post("/sessions", json={})
        assert resp.status_code == 400
        assert "userId" in resp.json()["error"]

    def test_list_and_limit(self, client):
        for _ in range(3):
            _create(client)
        assert len(client.get("/sessions", params={"userId": "u1"}).json()) == 3
        assert len(client.get("/sessions", params={"userId": "u1", "limit": 2}).json()) == 2
        assert client.get("/sessions", params={"userId": "u1", "limit": 0}).status_code == 400

    def test_get_missing_session(self, client):
        resp = client.get("/sessions/nope", params={"userId": "u1"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "Session not found"

    def test_rename(self, client):
        session = _create(client)
        resp = client.patch(f"/sessions/{session['id']}", json={"userId": "u1", "name": "Finals"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Finals"

    def test_delete_session(self, client):
        session = _create(client)
        resp = client.delete(f"/sessions/{session['id']}", params={"userId": "u1"})
        assert resp.status_code == 200
        assert client.get(f"/sessions/{session['id']}", params={"userId": "u1"}).status_code == 404
        assert client.delete(f"/sessions/{session['id']}", params={"userId": "u1"}).status_code == 404


class TestChatEndpoints:
    """Tests for /chat and the message routes."""

    def test_send_message(self, client):
        session = _create(client)
        resp = client.post("/chat", json={"sessionId": session["id"], "userId": "u1", "prompt": "Hello"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["botReply"] == "reply 1 to: Hello"
        assert [m["role"] for m in data["session"]["messages"]] == ["user", "assistant"]
        assert data["session"]["name"] == "New Session"

    def test_missing_prompt(self, client):
        session = _create(client)
        resp = client.post("/chat", json={"sessionId": session["id"], "userId": "u1"})
        assert resp.status_code == 400
        assert "prompt" in resp.json()["error"]

    def test_unknown_session(self, client):
        resp = client.post("/chat", json={"sessionId": "nope", "userId": "u1", "prompt": "Hi"})
        assert resp.status_code == 404

    def test_completion_failure_is_502(self, client, llm_provider):
        session = _create(client)
        llm_provider.chat_completion.side_effect = LLMProviderError("HTTP 503 from provider")

        resp = client.post("/chat", json={"sessionId": session["id"], "userId": "u1", "prompt": "Hi"})

        assert resp.status_code == 502
        assert resp.json()["details"] == "HTTP 503 from provider"
        stored = client.get(f"/sessions/{session['id']}", params={"userId": "u1"}).json()
        assert stored["messages"] == []

    def test_details_hidden_outside_debug(self, client, llm_provider, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        session = _create(client)
        llm_provider.chat_completion.side_effect = LLMProviderError("secret upstream text")

        resp = client.post("/chat", json={"sessionId": session["id"], "userId": "u1", "prompt": "Hi"})

        assert resp.status_code == 502
        assert "details" not in resp.json()

    def test_edit_and_delete_message(self, client):
        session = _create(client)
        for prompt in ("one", "two"):
            client.post("/chat", json={"sessionId": session["id"], "userId": "u1", "prompt": prompt})

        resp = client.put(f"/sessions/{session['id']}/messages/0", json={"userId": "u1", "content": "ONE"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["botReply"] == "reply 3 to: ONE"
        assert len(data["session"]["messages"]) == 2

        resp = client.delete(f"/sessions/{session['id']}/messages/1", params={"userId": "u1"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["botReply"] is None
        assert len(data["session"]["messages"]) == 1

    def test_message_index_errors(self, client):
        session = _create(client)
        resp = client.put(f"/sessions/{session['id']}/messages/5", json={"userId": "u1", "content": "x"})
        assert resp.status_code == 404
        resp = client.delete(f"/sessions/{session['id']}/messages/-1", params={"userId": "u1"})
        assert resp.status_code == 400


class TestNotesAndFiles:
    """Tests for /notes/sync and /files/delete."""

    def test_sync(self, client, document_store, blob_store):
        import asyncio

        async def seed():
            await blob_store.put("kept", b"png")
            await document_store.add("u1", NOTES_COLLECTION, {"publicId": "kept"})
            await document_store.add("u1", NOTES_COLLECTION, {"publicId": "gone"})

        asyncio.run(seed())

        resp = client.post("/notes/sync", json={"userId": "u1"})
        assert resp.status_code == 200
        assert resp.json() == {"synced": 1, "removed": 1, "errors": []}

    def test_delete_missing_file(self, client):
        resp = client.post("/files/delete", json={"publicId": "nothing"})
        assert resp.status_code == 200
        assert resp.json() == {"status": "success", "message": "File not found, no action taken"}

    def test_delete_file_too_large(self, client):
        resp = client.post("/files/delete", json={"publicId": "big", "fileSize": 20 * 1024 * 1024})
        assert resp.status_code == 400
        assert resp.json()["error"] == "File size exceeds limit"


class TestAuthentication:
    """Tests for bearer token checks when auth is enabled."""

    @pytest.fixture(autouse=True)
    def enable_auth(self, monkeypatch):
        monkeypatch.setattr(settings, "auth_enabled", True)

    def test_missing_token(self, client):
        assert client.post("/sessions", json={"userId": "u1"}).status_code == 401

    def test_invalid_token(self, client):
        resp = client.post("/sessions", json={"userId": "u1"},
                           headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_own_user(self, client):
        token = create_access_token({"sub": "u1"})
        resp = client.post("/sessions", json={"userId": "u1"},
                           headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 201

    def test_other_user_reads_as_not_found(self, client):
        token = create_access_token({"sub": "u2"})
        resp = client.get("/sessions", params={"userId": "u1"},
                          headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 404
