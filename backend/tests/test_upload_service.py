"""Tests for blob storage and the attachment upload service."""

from unittest.mock import MagicMock, patch

import pytest

from services.blob_store import BlobStore, LocalBlobStore
from services.stores import DocumentStore, StoreError
from services.upload import (
    Attachment,
    AttachmentTooLargeError,
    UploadService,
    build_storage_path,
)


class TestLocalBlobStore:
    """Tests for LocalBlobStore."""

    def test_upload_then_download(self, blob_store):
        """Stored bytes can be read back from the same path."""
        blob_store.upload("user-1/conv-1/lease.txt", b"rent")

        assert blob_store.download("user-1/conv-1/lease.txt") == b"rent"

    def test_upload_creates_nested_directories(self, blob_store, tmp_path):
        blob_store.upload("user-1/conv-1/lease.txt", b"rent")

        assert (tmp_path / "blobs" / "user-1" / "conv-1" / "lease.txt").read_bytes() == b"rent"

    def test_existing_object_is_rejected(self, blob_store):
        """Uploading to an occupied path fails instead of overwriting."""
        blob_store.upload("user-1/conv-1/lease.txt", b"first")

        with pytest.raises(StoreError) as exc_info:
            blob_store.upload("user-1/conv-1/lease.txt", b"second")

        assert "already exists" in str(exc_info.value)
        assert blob_store.download("user-1/conv-1/lease.txt") == b"first"

    def test_missing_object(self, blob_store):
        with pytest.raises(StoreError):
            blob_store.download("user-1/conv-1/missing.txt")

    def test_path_outside_root_is_rejected(self, blob_store):
        with pytest.raises(StoreError):
            blob_store.upload("../escape.txt", b"data")


class TestBuildStoragePath:
    def test_layout(self):
        assert build_storage_path("user-1", "conv-1", "lease.pdf") == "user-1/conv-1/lease.pdf"


class TestValidateAttachment:
    """Tests for UploadService.validate_attachment."""

    def test_too_large(self):
        service = UploadService(MagicMock(spec=BlobStore), max_size_bytes=4)

        with pytest.raises(AttachmentTooLargeError) as exc_info:
            service.validate_attachment(Attachment("lease.txt", b"12345"))

        assert str(exc_info.value) == "File size must be less than 10MB"
        assert exc_info.value.size == 5

    def test_at_limit_is_accepted(self):
        service = UploadService(MagicMock(spec=BlobStore), max_size_bytes=5)

        service.validate_attachment(Attachment("lease.txt", b"12345"))

    def test_unsupported_type(self):
        service = UploadService(MagicMock(spec=BlobStore))

        with pytest.raises(ValueError):
            service.validate_attachment(Attachment("payload.exe", b"MZ"))


class TestStoreAttachment:
    """Tests for UploadService.store_attachment."""

    def test_stores_blob_and_record(self, blob_store, conversation_store, document_store):
        """The blob lands under user/conversation and the record carries extracted text."""
        service = UploadService(blob_store)
        conversation = conversation_store.create("user-1")

        upload = service.store_attachment(
            document_store,
            "user-1",
            conversation.id,
            Attachment("lease.txt", b"The tenant shall pay rent.", "text/plain"),
        )

        assert upload.storage_path == f"user-1/{conversation.id}/lease.txt"
        assert upload.file_name == "lease.txt"
        assert upload.file_type == "text/plain"
        assert upload.file_size == 26
        assert upload.extracted_text == "The tenant shall pay rent."
        assert blob_store.download(upload.storage_path) == b"The tenant shall pay rent."
        assert document_store.latest_for_conversation(conversation.id).id == upload.id

    def test_image_is_stored_without_text(self, blob_store, conversation_store, document_store):
        service = UploadService(blob_store)
        conversation = conversation_store.create("user-1")

        upload = service.store_attachment(
            document_store, "user-1", conversation.id, Attachment("scan.png", b"\x89PNG", "image/png")
        )

        assert upload.extracted_text is None

    def test_damaged_pdf_is_recorded_without_text(
        self, blob_store, conversation_store, document_store
    ):
        """A PDF the reader chokes on is still stored and recorded."""
        service = UploadService(blob_store)
        conversation = conversation_store.create("user-1")

        with patch("services.file_loader.PdfReader", side_effect=AttributeError("trailer")):
            upload = service.store_attachment(
                document_store,
                "user-1",
                conversation.id,
                Attachment("order.pdf", b"%PDF-1.4 broken", "application/pdf"),
            )

        assert upload.extracted_text is None
        assert document_store.latest_for_conversation(conversation.id).id == upload.id

    def test_oversized_file_never_reaches_storage(self):
        blob_store = MagicMock(spec=BlobStore)
        documents = MagicMock(spec=DocumentStore)
        service = UploadService(blob_store, max_size_bytes=1)

        with pytest.raises(AttachmentTooLargeError):
            service.store_attachment(documents, "user-1", "conv-1", Attachment("a.txt", b"ab"))

        blob_store.upload.assert_not_called()
        documents.add.assert_not_called()

    def test_blob_failure_skips_record(self):
        blob_store = MagicMock(spec=BlobStore)
        blob_store.upload.side_effect = StoreError("The resource already exists")
        documents = MagicMock(spec=DocumentStore)
        service = UploadService(blob_store)

        with pytest.raises(StoreError):
            service.store_attachment(documents, "user-1", "conv-1", Attachment("a.txt", b"ab"))

        documents.add.assert_not_called()

    def test_local_store_is_a_blob_store(self, tmp_path):
        assert isinstance(LocalBlobStore(tmp_path), BlobStore)
