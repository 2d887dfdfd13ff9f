"""
Centralized enum definitions for the legal advisor backend.
Single source of truth for all enums used across database models and schemas.
"""

from enum import Enum


class MessageRole(str, Enum):
    """Author of a conversation message."""
    USER = "user"
    ASSISTANT = "assistant"


class FileType(str, Enum):
    """Attachment types accepted for upload."""
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"
    TXT = "txt"
    MD = "md"
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
