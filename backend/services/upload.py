"""
Upload service layer containing the document attachment business logic.
Separated from the web layer for better testability and maintainability.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from config import MAX_UPLOAD_SIZE_BYTES
from schemas import DocumentUploadInfo
from services.blob_store import BlobStore
from services.file_loader import FileLoaderService
from services.stores import DocumentStore

logger = logging.getLogger(__name__)


class AttachmentTooLargeError(ValueError):
    """Raised for attachments above the upload size ceiling."""

    def __init__(self, size: int, limit: int = MAX_UPLOAD_SIZE_BYTES):
        self.size = size
        self.limit = limit
        super().__init__("File size must be less than 10MB")


@dataclass
class Attachment:
    """A file picked by the user, held in memory until it is sent."""

    name: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)


def build_storage_path(user_id: str, conversation_id: str, file_name: str) -> str:
    return f"{user_id}/{conversation_id}/{file_name}"


class UploadService:
    """Service class handling all document upload business logic."""

    def __init__(
        self,
        blob_store: BlobStore,
        file_loader: Optional[FileLoaderService] = None,
        max_size_bytes: int = MAX_UPLOAD_SIZE_BYTES,
    ):
        self.blob_store = blob_store
        self.file_loader = file_loader or FileLoaderService()
        self.max_size_bytes = max_size_bytes

    def validate_attachment(self, attachment: Attachment) -> None:
        """
        Check an attachment before any storage call is made.

        Raises:
            AttachmentTooLargeError: If the file exceeds the size ceiling
            ValueError: If the file type is not accepted
        """
        if attachment.size > self.max_size_bytes:
            raise AttachmentTooLargeError(attachment.size, self.max_size_bytes)
        self.file_loader.detect_file_type(attachment.name, attachment.content_type)

    def store_attachment(
        self,
        documents: DocumentStore,
        user_id: str,
        conversation_id: str,
        attachment: Attachment,
    ) -> DocumentUploadInfo:
        """
        Upload an attachment to blob storage and record it for the conversation.

        Args:
            documents: Store receiving the upload record
            user_id: Owner of the conversation
            conversation_id: Conversation the file is attached to
            attachment: The file to store

        Returns:
            The persisted upload record

        Raises:
            AttachmentTooLargeError, ValueError: Rejected before upload
            StoreError: If the blob or the record cannot be stored
        """
        self.validate_attachment(attachment)

        storage_path = build_storage_path(user_id, conversation_id, attachment.name)
        self.blob_store.upload(storage_path, attachment.content)

        extracted_text = self.file_loader.extract_text(
            attachment.content, attachment.name, attachment.content_type
        )

        return documents.add(
            conversation_id=conversation_id,
            file_name=attachment.name,
            file_type=attachment.content_type,
            file_size=attachment.size,
            storage_path=storage_path,
            extracted_text=extracted_text,
        )
