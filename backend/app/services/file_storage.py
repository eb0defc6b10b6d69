"""Blob store: raw file bytes on the local filesystem, addressed by path."""
import logging
import os
import uuid
import aiofiles
from pathlib import Path
from app.config import settings

logger = logging.getLogger(__name__)


class FileStorageService:
    """Handles blob read/write/delete under a single root directory."""

    def __init__(self, base_path: str | None = None):
        self.base_path = Path(base_path or settings.FOLDER_PATH)

    async def save(self, file_bytes: bytes) -> str:
        """Save bytes under a fresh uuid filename. Returns the absolute storage path."""
        self.base_path.mkdir(parents=True, exist_ok=True)
        file_path = self.base_path / str(uuid.uuid4())
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(file_bytes)
        return str(file_path.resolve())

    async def read(self, storage_path: str) -> bytes | None:
        """Read blob bytes. Returns None when nothing is stored at the path."""
        path = Path(storage_path)
        if not path.is_file():
            logger.warning("Blob missing at %s", storage_path)
            return None
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def delete(self, storage_path: str) -> None:
        """Delete a blob. Deleting an already-missing blob is a no-op."""
        path = Path(storage_path)
        if path.exists():
            os.remove(path)
            return
        logger.warning("Blob already gone at %s", storage_path)


file_storage = FileStorageService()
