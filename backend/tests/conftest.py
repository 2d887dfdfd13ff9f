"""Shared fixtures: an in-memory SQLite database and stores on top of it."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database_models import Base
from services.blob_store import LocalBlobStore
from services.stores import SqlConversationStore, SqlDocumentStore, SqlMessageStore
from services.upload import UploadService


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads (TestClient runs in one)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def conversation_store(session_factory):
    return SqlConversationStore(session_factory)


@pytest.fixture
def message_store(session_factory):
    return SqlMessageStore(session_factory)


@pytest.fixture
def document_store(session_factory):
    return SqlDocumentStore(session_factory)


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(tmp_path / "blobs")


@pytest.fixture
def upload_service(blob_store):
    return UploadService(blob_store)
