"""Schemas for conversations, messages and document uploads."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from enums import MessageRole
from schemas.rendering import Block


class ConversationCreate(BaseModel):
    """Request to start a new conversation."""

    title: str = Field("New Conversation", min_length=1, max_length=255)


class ConversationUpdate(BaseModel):
    """Request to rename a conversation."""

    title: str = Field(..., min_length=1, max_length=255)


class ConversationInfo(BaseModel):
    """A conversation as returned by the API and the stores."""

    id: str
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageCreate(BaseModel):
    """Request to append a message to a conversation."""

    role: MessageRole = MessageRole.USER
    content: str


class MessageInfo(BaseModel):
    """A persisted message, optionally with its rendered display blocks."""

    id: int
    conversation_id: str
    role: MessageRole
    content: str
    created_at: datetime
    blocks: Optional[list[Block]] = None

    model_config = ConfigDict(from_attributes=True)


class DocumentUploadInfo(BaseModel):
    """Metadata of a stored attachment."""

    id: int
    conversation_id: str
    file_name: str
    file_type: Optional[str] = None
    file_size: int
    storage_path: str
    extracted_text: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UploadResponse(BaseModel):
    """Response model for file upload operations."""

    message: str
    upload: DocumentUploadInfo
    text_extracted: bool = False
