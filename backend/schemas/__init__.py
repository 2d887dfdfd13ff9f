"""
Schemas package - re-exports all schemas.

All schemas can be imported directly from `schemas` or from their specific modules.

Example:
    from schemas import LegalChatRequest, MessageInfo
    from schemas.rendering import ParagraphBlock
"""

# Common schemas
from schemas.common import ErrorResponse

# Legal-chat proxy schemas
from schemas.chat import LegalChatRequest, LegalChatResponse

# Rendering schemas
from schemas.rendering import (
    Block,
    HeadingBlock,
    LineBreakBlock,
    ParagraphBlock,
    TextSegment,
)

# Conversation schemas
from schemas.conversations import (
    ConversationCreate,
    ConversationInfo,
    ConversationUpdate,
    DocumentUploadInfo,
    MessageCreate,
    MessageInfo,
    UploadResponse,
)

# Health schemas
from schemas.health import HealthResponse, HealthStatusDetail

__all__ = [
    # Common
    "ErrorResponse",
    # Legal chat
    "LegalChatRequest",
    "LegalChatResponse",
    # Rendering
    "Block",
    "HeadingBlock",
    "LineBreakBlock",
    "ParagraphBlock",
    "TextSegment",
    # Conversations
    "ConversationCreate",
    "ConversationInfo",
    "ConversationUpdate",
    "DocumentUploadInfo",
    "MessageCreate",
    "MessageInfo",
    "UploadResponse",
    # Health
    "HealthResponse",
    "HealthStatusDetail",
]
