"""
Database models for conversations, messages and document uploads using SQLAlchemy.
This module defines the database schema and the engine/session helpers.
"""

import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache

logger = logging.getLogger(__name__)

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from config import DATABASE_URL
from enums import MessageRole

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_uuid() -> str:
    return str(uuid.uuid4())


class Conversation(Base):
    """A titled thread of messages owned by one user."""
    __tablename__ = "conversations"

    id = Column(String(36), primary_key=True, default=_new_uuid)
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="New Conversation")

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    # Relationships
    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan")
    document_uploads = relationship("DocumentUpload", back_populates="conversation", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Conversation(id={self.id}, title='{self.title}')>"


class Message(Base):
    """A single immutable chat message."""
    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint(
            f"role IN ('{MessageRole.USER.value}', '{MessageRole.ASSISTANT.value}')",
            name="check_message_role",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    conversation = relationship("Conversation", back_populates="messages")

    def __repr__(self):
        return f"<Message(id={self.id}, role='{self.role}')>"


class DocumentUpload(Base):
    """Record of a file attached to a conversation (content lives in blob storage)."""
    __tablename__ = "document_uploads"
    __table_args__ = (
        CheckConstraint("file_size >= 0", name="check_file_size_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True)

    # File info
    file_name = Column(String(500), nullable=False)
    file_type = Column(String(100), nullable=True)
    file_size = Column(BigInteger, nullable=False)
    storage_path = Column(String(1000), nullable=False)
    extracted_text = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    conversation = relationship("Conversation", back_populates="document_uploads")

    def __repr__(self):
        return f"<DocumentUpload(id={self.id}, file_name='{self.file_name}')>"


# Database connection and session management
@lru_cache
def get_engine():
    """Create and return a SQLAlchemy engine."""
    return create_engine(DATABASE_URL, echo=False)


def get_session_maker():
    """Create and return a session maker."""
    engine = get_engine()
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database():
    """Initialize the database by creating all tables."""
    engine = get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database tables created successfully")
