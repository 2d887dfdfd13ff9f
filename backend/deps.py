"""
Dependency injection setup for the FastAPI application.
Provides service and store instances to endpoints.
"""

from functools import lru_cache
from typing import Callable, Optional

from fastapi import Header, HTTPException
from sqlalchemy.orm import Session

from config import BLOB_STORAGE_DIR
from database_models import get_session_maker
from services.blob_store import BlobStore, LocalBlobStore
from services.health import HealthService
from services.legal_chat import LegalChatService
from services.stores import (
    ConversationStore,
    DocumentStore,
    MessageStore,
    SqlConversationStore,
    SqlDocumentStore,
    SqlMessageStore,
)
from services.upload import UploadService


@lru_cache
def get_session_factory() -> Callable[[], Session]:
    """
    Get the shared SQLAlchemy session factory.
    Stores open one session per operation from it.
    """
    return get_session_maker()


def get_conversation_store() -> ConversationStore:
    return SqlConversationStore(get_session_factory())


def get_message_store() -> MessageStore:
    return SqlMessageStore(get_session_factory())


def get_document_store() -> DocumentStore:
    return SqlDocumentStore(get_session_factory())


@lru_cache
def get_blob_store() -> BlobStore:
    """
    Get the blob store for uploaded documents.
    Using lru_cache to ensure singleton behavior during request lifecycle.
    """
    return LocalBlobStore(BLOB_STORAGE_DIR)


@lru_cache
def get_legal_chat_service() -> LegalChatService:
    """
    Get a LegalChatService instance.
    Using lru_cache to ensure singleton behavior during request lifecycle.
    """
    return LegalChatService()


@lru_cache
def get_upload_service() -> UploadService:
    """
    Get an UploadService instance.
    Using lru_cache to ensure singleton behavior during request lifecycle.
    """
    return UploadService(get_blob_store())


@lru_cache
def get_health_service() -> HealthService:
    """
    Get a HealthService instance.
    Using lru_cache to ensure singleton behavior during request lifecycle.
    """
    return HealthService()


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """
    Identity of the caller, as forwarded by the authenticating gateway.

    Raises:
        HTTPException: 401 when the header is missing
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id
