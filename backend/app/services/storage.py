"""
Local-disk file storage for uploaded documents.

Stored paths are relative to the storage root so the root can move.
"""
import logging
import uuid
from pathlib import Path

from app.core.config import settings

logger = logging.getLogger(__name__)


class LocalFileStorage:
    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root or settings.STORAGE_ROOT)

    def _resolve(self, storage_path: str) -> Path:
        path = Path(storage_path)
        return path if path.is_absolute() else self.root / path

    def read_bytes(self, storage_path: str) -> bytes:
        return self._resolve(storage_path).read_bytes()

    def exists(self, storage_path: str) -> bool:
        return self._resolve(storage_path).is_file()

    def save_bytes(self, data: bytes, file_name: str) -> str:
        """Write an upload under a random name and return its storage path."""
        self.root.mkdir(parents=True, exist_ok=True)
        suffix = Path(file_name).suffix.lower() or ".pdf"
        storage_path = f"{uuid.uuid4()}{suffix}"
        self._resolve(storage_path).write_bytes(data)
        logger.info("Stored %s (%d bytes) as %s", file_name, len(data), storage_path)
        return storage_path
