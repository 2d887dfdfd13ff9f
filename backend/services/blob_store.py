"""
Blob storage for uploaded legal documents.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from services.stores import StoreError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Object storage addressed by slash-separated paths."""

    @abstractmethod
    def upload(self, path: str, content: bytes) -> str:
        """Store `content` at `path`; fails if the object already exists."""

    @abstractmethod
    def download(self, path: str) -> bytes:
        ...


class LocalBlobStore(BlobStore):
    """Blob store backed by a directory on the local filesystem."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if target == self.root or self.root not in target.parents:
            raise StoreError(f"Invalid storage path: {path}")
        return target

    def upload(self, path: str, content: bytes) -> str:
        target = self._resolve(path)
        if target.exists():
            raise StoreError("The resource already exists")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to write blob {path}: {e}")
            raise StoreError(f"Failed to store {path}: {e}") from e

        logger.info(f"Stored blob {path} ({len(content)} bytes)")
        return path

    def download(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except FileNotFoundError as e:
            raise StoreError(f"Object not found: {path}") from e
        except OSError as e:
            raise StoreError(f"Failed to read {path}: {e}") from e
