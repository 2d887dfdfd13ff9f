"""
Conversation, message and document-upload stores.

The chat flow and the legal-chat proxy only depend on the narrow interfaces
defined here, so they can be exercised against in-memory fakes. The SQL
implementations open one session per operation from a session factory.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database_models import Conversation, DocumentUpload, Message
from enums import MessageRole
from schemas import ConversationInfo, DocumentUploadInfo, MessageInfo

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a persistence or storage operation fails."""


# --- Interfaces ---
class ConversationStore(ABC):
    """Persistence for conversations."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[ConversationInfo]:
        """Conversations of a user, most recently updated first."""

    @abstractmethod
    def create(self, user_id: str, title: str = "New Conversation") -> ConversationInfo:
        ...

    @abstractmethod
    def get(self, conversation_id: str) -> Optional[ConversationInfo]:
        ...

    @abstractmethod
    def update_title(self, conversation_id: str, title: str) -> Optional[ConversationInfo]:
        ...

    @abstractmethod
    def delete(self, conversation_id: str) -> bool:
        """Delete a conversation with its messages and uploads. False if unknown."""


class MessageStore(ABC):
    """Persistence for conversation messages."""

    @abstractmethod
    def list_for_conversation(self, conversation_id: str) -> list[MessageInfo]:
        """Messages of a conversation, oldest first."""

    @abstractmethod
    def add(self, conversation_id: str, role: MessageRole, content: str) -> MessageInfo:
        ...


class DocumentStore(ABC):
    """Persistence for document-upload records."""

    @abstractmethod
    def add(
        self,
        conversation_id: str,
        file_name: str,
        file_type: Optional[str],
        file_size: int,
        storage_path: str,
        extracted_text: Optional[str] = None,
    ) -> DocumentUploadInfo:
        ...

    @abstractmethod
    def latest_for_conversation(self, conversation_id: str) -> Optional[DocumentUploadInfo]:
        ...


# --- SQLAlchemy implementations ---
class _SqlStore:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session committed on success, rolled back and wrapped on database errors."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database operation failed: {e}")
            raise StoreError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


class SqlConversationStore(_SqlStore, ConversationStore):
    def list_for_user(self, user_id: str) -> list[ConversationInfo]:
        with self._session() as session:
            rows = (
                session.query(Conversation)
                .filter(Conversation.user_id == user_id)
                .order_by(Conversation.updated_at.desc())
                .all()
            )
            return [ConversationInfo.model_validate(row) for row in rows]

    def create(self, user_id: str, title: str = "New Conversation") -> ConversationInfo:
        with self._session() as session:
            conversation = Conversation(user_id=user_id, title=title)
            session.add(conversation)
            session.flush()
            logger.info(f"Created conversation {conversation.id} for user {user_id}")
            return ConversationInfo.model_validate(conversation)

    def get(self, conversation_id: str) -> Optional[ConversationInfo]:
        with self._session() as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                return None
            return ConversationInfo.model_validate(conversation)

    def update_title(self, conversation_id: str, title: str) -> Optional[ConversationInfo]:
        with self._session() as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                return None
            conversation.title = title
            conversation.updated_at = datetime.now(timezone.utc)
            session.flush()
            return ConversationInfo.model_validate(conversation)

    def delete(self, conversation_id: str) -> bool:
        with self._session() as session:
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                return False
            session.delete(conversation)
            logger.info(f"Deleted conversation {conversation_id}")
            return True


class SqlMessageStore(_SqlStore, MessageStore):
    def list_for_conversation(self, conversation_id: str) -> list[MessageInfo]:
        with self._session() as session:
            rows = (
                session.query(Message)
                .filter(Message.conversation_id == conversation_id)
                .order_by(Message.created_at.asc(), Message.id.asc())
                .all()
            )
            return [MessageInfo.model_validate(row) for row in rows]

    def add(self, conversation_id: str, role: MessageRole, content: str) -> MessageInfo:
        with self._session() as session:
            if session.get(Conversation, conversation_id) is None:
                raise StoreError(f"Conversation {conversation_id} does not exist")
            message = Message(
                conversation_id=conversation_id,
                role=MessageRole(role).value,
                content=content,
            )
            session.add(message)
            session.flush()
            return MessageInfo.model_validate(message)


class SqlDocumentStore(_SqlStore, DocumentStore):
    def add(
        self,
        conversation_id: str,
        file_name: str,
        file_type: Optional[str],
        file_size: int,
        storage_path: str,
        extracted_text: Optional[str] = None,
    ) -> DocumentUploadInfo:
        with self._session() as session:
            upload = DocumentUpload(
                conversation_id=conversation_id,
                file_name=file_name,
                file_type=file_type,
                file_size=file_size,
                storage_path=storage_path,
                extracted_text=extracted_text,
            )
            session.add(upload)
            session.flush()
            logger.info(f"Recorded upload {file_name} ({file_size} bytes) for {conversation_id}")
            return DocumentUploadInfo.model_validate(upload)

    def latest_for_conversation(self, conversation_id: str) -> Optional[DocumentUploadInfo]:
        with self._session() as session:
            upload = (
                session.query(DocumentUpload)
                .filter(DocumentUpload.conversation_id == conversation_id)
                .order_by(DocumentUpload.created_at.desc(), DocumentUpload.id.desc())
                .first()
            )
            if upload is None:
                return None
            return DocumentUploadInfo.model_validate(upload)
