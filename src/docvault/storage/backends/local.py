"""Disk-backed blob store."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import aiofiles
import aiofiles.os

from docvault.exceptions import InvalidStoragePathError, NotFoundError, StorageWriteError

from ..base import CHUNK_SIZE, BlobStore, BlobStream, StoredBlob, make_storage_name

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 5


class LocalBlobStream(BlobStream):
    def __init__(self, handle, size: int, chunk_size: int = CHUNK_SIZE):
        super().__init__(size, chunk_size)
        self._handle = handle

    async def read_chunk(self) -> bytes:
        return await self._handle.read(self.chunk_size)

    async def _release(self) -> None:
        await self._handle.close()


class LocalBlobStore(BlobStore):
    """Stores each blob as one file directly under ``base_path``.

    Storage paths are bare file names relative to ``base_path``; anything that
    would resolve outside of it is rejected.
    """

    def __init__(self, base_path: str | Path, chunk_size: int = CHUNK_SIZE):
        self.base_path = Path(base_path).resolve()
        self.chunk_size = chunk_size

    async def init(self) -> None:
        await aiofiles.os.makedirs(self.base_path, exist_ok=True)
        logger.info("Blob store ready at %s", self.base_path)

    def _get_file_path(self, storage_path: str) -> Path:
        if not storage_path or "/" in storage_path or "\\" in storage_path or storage_path in (".", ".."):
            raise InvalidStoragePathError()
        path = (self.base_path / storage_path).resolve()
        if path.parent != self.base_path:
            raise InvalidStoragePathError()
        return path

    async def _create(self, suggested_name: str):
        """Open a fresh file under an unused name; never touches an existing blob."""
        for _ in range(MAX_NAME_ATTEMPTS):
            storage_path = make_storage_name(suggested_name)
            path = self._get_file_path(storage_path)
            try:
                # "xb" refuses to clobber an existing blob
                handle = await aiofiles.open(path, "xb")
            except FileExistsError:
                logger.debug("Storage name %s already taken, picking another", storage_path)
                continue
            except OSError as exc:
                logger.error("Blob create failed for %s: %s", storage_path, exc)
                raise StorageWriteError() from exc
            return storage_path, path, handle
        logger.error("No free storage name for %s after %d attempts", suggested_name, MAX_NAME_ATTEMPTS)
        raise StorageWriteError()

    async def put(self, content: bytes, suggested_name: str) -> StoredBlob:
        storage_path, path, handle = await self._create(suggested_name)
        try:
            try:
                await handle.write(content)
            finally:
                await handle.close()
            size = (await aiofiles.os.stat(path)).st_size
        except OSError as exc:
            logger.error("Blob write failed for %s: %s", storage_path, exc)
            # only the file created above is removed
            try:
                await aiofiles.os.remove(path)
            except OSError as cleanup_exc:
                logger.error("Could not remove partial blob %s: %s", storage_path, cleanup_exc)
            raise StorageWriteError() from exc
        logger.debug("Stored blob %s (%d bytes)", storage_path, size)
        return StoredBlob(storage_path=storage_path, size=size)

    async def open_read(self, storage_path: str) -> BlobStream:
        path = self._get_file_path(storage_path)
        try:
            handle = await aiofiles.open(path, "rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFoundError() from exc
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError:
            await handle.close()
            raise
        return LocalBlobStream(handle, size, self.chunk_size)

    async def remove(self, storage_path: str) -> bool:
        path = self._get_file_path(storage_path)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.error("Blob removal failed for %s: %s", storage_path, exc)
            raise StorageWriteError("Failed to delete document") from exc
        logger.debug("Removed blob %s", storage_path)
        return True

    async def exists(self, storage_path: str) -> bool:
        try:
            path = self._get_file_path(storage_path)
        except InvalidStoragePathError:
            return False
        return await aiofiles.os.path.isfile(path)
