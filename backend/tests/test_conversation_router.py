"""Tests for the conversation, message and upload endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from deps import (
    get_conversation_store,
    get_document_store,
    get_message_store,
    get_upload_service,
)
from enums import MessageRole
from routers.conversation_router import router as conversation_router
from routers.upload_router import router as upload_router
from services.blob_store import LocalBlobStore
from services.upload import UploadService

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}


@pytest.fixture
def small_upload_service(tmp_path):
    return UploadService(LocalBlobStore(tmp_path / "uploads"), max_size_bytes=32)


@pytest.fixture
def client(conversation_store, message_store, document_store, small_upload_service):
    """Create a test app with the conversation and upload routers on SQLite."""
    app = FastAPI()
    app.include_router(conversation_router, prefix="/api")
    app.include_router(upload_router, prefix="/api")
    app.dependency_overrides[get_conversation_store] = lambda: conversation_store
    app.dependency_overrides[get_message_store] = lambda: message_store
    app.dependency_overrides[get_document_store] = lambda: document_store
    app.dependency_overrides[get_upload_service] = lambda: small_upload_service
    return TestClient(app)


def create_conversation(client, headers=USER) -> str:
    response = client.post("/api/conversations", json={}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


class TestConversationEndpoints:
    """Tests for /api/conversations."""

    def test_requires_user_header(self, client):
        response = client.get("/api/conversations")

        assert response.status_code == 401

    def test_create_and_list(self, client):
        response = client.post("/api/conversations", json={}, headers=USER)

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "New Conversation"
        assert body["user_id"] == "user-1"

        listed = client.get("/api/conversations", headers=USER).json()
        assert [c["id"] for c in listed] == [body["id"]]
        assert client.get("/api/conversations", headers=OTHER_USER).json() == []

    def test_rename(self, client):
        conversation_id = create_conversation(client)

        response = client.patch(
            f"/api/conversations/{conversation_id}", json={"title": "Tenancy dispute"}, headers=USER
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Tenancy dispute"

    def test_foreign_conversation_is_not_found(self, client):
        conversation_id = create_conversation(client)

        response = client.get(f"/api/conversations/{conversation_id}/messages", headers=OTHER_USER)

        assert response.status_code == 404

    def test_delete(self, client, conversation_store):
        conversation_id = create_conversation(client)

        response = client.delete(f"/api/conversations/{conversation_id}", headers=USER)

        assert response.status_code == 200
        assert conversation_store.get(conversation_id) is None
        assert client.delete(f"/api/conversations/{conversation_id}", headers=USER).status_code == 404


class TestMessageEndpoints:
    """Tests for /api/conversations/{id}/messages."""

    def test_post_and_list(self, client):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/conversations/{conversation_id}/messages",
            json={"content": "What is bail?"},
            headers=USER,
        )

        assert response.status_code == 201
        assert response.json()["role"] == "user"

        listed = client.get(f"/api/conversations/{conversation_id}/messages", headers=USER).json()
        assert [m["content"] for m in listed] == ["What is bail?"]
        assert listed[0]["blocks"] is None

    def test_empty_content_is_rejected(self, client):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/conversations/{conversation_id}/messages", json={"content": "  "}, headers=USER
        )

        assert response.status_code == 400

    def test_rendered_blocks(self, client, message_store):
        """render=true attaches display blocks to each message."""
        conversation_id = create_conversation(client)
        message_store.add(conversation_id, MessageRole.ASSISTANT, "# Bail\n**Yes**, usually")

        listed = client.get(
            f"/api/conversations/{conversation_id}/messages",
            params={"render": "true"},
            headers=USER,
        ).json()

        assert listed[0]["blocks"] == [
            {"type": "heading", "level": 1, "text": "Bail"},
            {
                "type": "paragraph",
                "segments": [
                    {"style": "bold", "text": "Yes"},
                    {"style": "text", "text": ", usually"},
                ],
            },
        ]


class TestUploadEndpoint:
    """Tests for /api/conversations/{id}/uploads."""

    def test_upload_text_file(self, client, document_store):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/conversations/{conversation_id}/uploads",
            files={"file": ("lease.txt", b"Rent is due monthly.", "text/plain")},
            headers=USER,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["text_extracted"] is True
        assert body["upload"]["storage_path"] == f"user-1/{conversation_id}/lease.txt"
        assert document_store.latest_for_conversation(conversation_id).extracted_text == (
            "Rent is due monthly."
        )

    def test_too_large(self, client):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/conversations/{conversation_id}/uploads",
            files={"file": ("big.txt", b"x" * 64, "text/plain")},
            headers=USER,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "File size must be less than 10MB"

    def test_unsupported_type(self, client):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/conversations/{conversation_id}/uploads",
            files={"file": ("payload.exe", b"MZ", "application/octet-stream")},
            headers=USER,
        )

        assert response.status_code == 400

    def test_foreign_conversation(self, client):
        conversation_id = create_conversation(client)

        response = client.post(
            f"/api/conversations/{conversation_id}/uploads",
            files={"file": ("lease.txt", b"rent", "text/plain")},
            headers=OTHER_USER,
        )

        assert response.status_code == 404
