"""Tests for the local blob store."""

import os

from app.services.file_storage import FileStorageService


async def test_save_read_delete(tmp_path):
    """Test full blob lifecycle under a custom root."""
    storage = FileStorageService(str(tmp_path / 'blobs'))

    path = await storage.save(b'\x00\x01payload')

    assert os.path.dirname(path) == str((tmp_path / 'blobs').resolve())
    assert await storage.read(path) == b'\x00\x01payload'

    await storage.delete(path)

    assert not os.path.exists(path)
    assert await storage.read(path) is None


async def test_paths_are_unique(tmp_path):
    """Test identical payloads get distinct blobs."""
    storage = FileStorageService(str(tmp_path))

    first = await storage.save(b'same')
    second = await storage.save(b'same')

    assert first != second


async def test_delete_missing_blob_is_noop(tmp_path):
    """Test deleting twice does not raise."""
    storage = FileStorageService(str(tmp_path))
    path = await storage.save(b'x')

    await storage.delete(path)
    await storage.delete(path)

    assert not os.path.exists(path)
