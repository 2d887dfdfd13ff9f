"""
File Loader Service - Extract plain text from uploaded legal documents.
Text is extracted from PDF, TXT and MD files; other accepted types
(Word documents, images) are stored without text.
"""

import logging
from io import BytesIO
from typing import Optional

from pypdf import PdfReader

from enums import FileType

logger = logging.getLogger(__name__)


class FileLoaderService:
    """Detect attachment types and pull text out of them."""

    SUPPORTED_TYPES = set(FileType)
    TEXT_EXTRACTABLE_TYPES = {FileType.PDF, FileType.TXT, FileType.MD}

    MIME_TYPE_MAP = {
        "application/pdf": FileType.PDF,
        "application/msword": FileType.DOC,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": FileType.DOCX,
        "text/plain": FileType.TXT,
        "text/markdown": FileType.MD,
        "text/x-markdown": FileType.MD,
        "image/png": FileType.PNG,
        "image/jpeg": FileType.JPEG,
    }

    EXTENSION_MAP = {
        "pdf": FileType.PDF,
        "doc": FileType.DOC,
        "docx": FileType.DOCX,
        "txt": FileType.TXT,
        "text": FileType.TXT,
        "md": FileType.MD,
        "markdown": FileType.MD,
        "png": FileType.PNG,
        "jpg": FileType.JPG,
        "jpeg": FileType.JPEG,
    }

    def extract_text(
        self,
        content: bytes,
        filename: str,
        content_type: Optional[str] = None,
    ) -> Optional[str]:
        """
        Extract text from an uploaded file.

        Extraction problems are logged and reported as None; they never
        fail the upload.

        Args:
            content: Raw file content as bytes
            filename: Original filename
            content_type: Optional MIME type sent by the client

        Returns:
            The extracted text, or None when the type carries no text or
            nothing could be extracted
        """
        file_type = self.detect_file_type(filename, content_type)
        if file_type not in self.TEXT_EXTRACTABLE_TYPES:
            logger.info(f"No text extraction for {filename} ({file_type.value})")
            return None

        try:
            if file_type == FileType.PDF:
                text = self._load_pdf(content)
            else:
                text = self._load_text(content)
        except Exception as e:
            logger.error(f"Error extracting text from {filename} as {file_type.value}: {e}")
            return None

        if not text or not text.strip():
            logger.warning(f"No text content found in {filename}")
            return None
        return text

    def _load_pdf(self, content: bytes) -> str:
        """Concatenate the text of all PDF pages."""
        reader = PdfReader(BytesIO(content))

        pages = []
        for page in reader.pages:
            text = page.extract_text()
            if text and text.strip():
                pages.append(text)

        logger.info(f"Loaded PDF with {len(pages)} text pages of {len(reader.pages)}")
        return "\n\n".join(pages)

    def _load_text(self, content: bytes) -> str:
        """Decode plain text or markdown content."""
        # Try different encodings
        for encoding in ["utf-8", "latin-1", "cp1252"]:
            try:
                return content.decode(encoding)
            except UnicodeDecodeError:
                continue

        raise ValueError("Could not decode text file with any supported encoding")

    @classmethod
    def detect_file_type(cls, filename: str, mime_type: Optional[str] = None) -> FileType:
        """
        Detect file type from filename or MIME type.

        Args:
            filename: The filename with extension
            mime_type: Optional MIME type

        Returns:
            The detected FileType

        Raises:
            ValueError: If file type cannot be determined or is not supported
        """
        # Try MIME type first
        if mime_type and mime_type in cls.MIME_TYPE_MAP:
            return cls.MIME_TYPE_MAP[mime_type]

        # Fall back to extension
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if ext in cls.EXTENSION_MAP:
            return cls.EXTENSION_MAP[ext]

        raise ValueError(f"Unsupported file type: {filename} (mime: {mime_type})")
