# backend/routers/upload_router.py
"""
Upload router - thin web layer that delegates to UploadService.
Handles HTTP concerns only, business logic is in services.upload.UploadService.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from config import MAX_UPLOAD_SIZE_BYTES
from deps import (
    get_conversation_store,
    get_current_user_id,
    get_document_store,
    get_upload_service,
)
from routers.conversation_router import get_owned_conversation
from schemas import UploadResponse
from services.stores import ConversationStore, DocumentStore
from services.upload import Attachment, AttachmentTooLargeError, UploadService
from utils.error_handlers import handle_service_errors

router = APIRouter(
    prefix="/conversations",
    tags=["upload"],
)

READ_CHUNK_SIZE = 8192  # 8KB chunks


async def read_limited(file: UploadFile, limit: int = MAX_UPLOAD_SIZE_BYTES) -> bytes:
    """Read an upload, failing as soon as it grows past `limit` bytes."""
    if file.size is not None and file.size > limit:
        raise AttachmentTooLargeError(file.size, limit)

    # Use bytearray for efficient memory usage (avoids O(n^2) byte concatenation)
    content_buffer = bytearray()
    while True:
        chunk = await file.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        if len(content_buffer) + len(chunk) > limit:
            raise AttachmentTooLargeError(len(content_buffer) + len(chunk), limit)
        content_buffer.extend(chunk)
    return bytes(content_buffer)


@router.post("/{conversation_id}/uploads", response_model=UploadResponse, status_code=201)
@handle_service_errors("upload document")
async def upload_document_endpoint(
    conversation_id: str,
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    conversations: ConversationStore = Depends(get_conversation_store),
    documents: DocumentStore = Depends(get_document_store),
    upload_service: UploadService = Depends(get_upload_service),
):
    """
    Attach a document to a conversation.

    The file is stored under {user_id}/{conversation_id}/{file name}; text is
    extracted from PDF, TXT and MD files so the legal-chat function can use it
    as document context.
    """
    get_owned_conversation(conversations, conversation_id, user_id)
    if not file.filename:
        raise ValueError("No filename provided")

    try:
        content = await read_limited(file, upload_service.max_size_bytes)
    finally:
        await file.close()

    upload = upload_service.store_attachment(
        documents,
        user_id,
        conversation_id,
        Attachment(name=file.filename, content=content, content_type=file.content_type),
    )
    return UploadResponse(
        message=f"Document {upload.file_name} uploaded successfully.",
        upload=upload,
        text_extracted=upload.extracted_text is not None,
    )
