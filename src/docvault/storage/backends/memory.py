"""In-process blob store. Contents are lost when the process exits."""

from __future__ import annotations

from docvault.exceptions import NotFoundError

from ..base import CHUNK_SIZE, BlobStore, BlobStream, StoredBlob, make_storage_name


class MemoryBlobStream(BlobStream):
    def __init__(self, data: bytes, chunk_size: int = CHUNK_SIZE):
        super().__init__(len(data), chunk_size)
        self._view = memoryview(data)
        self._offset = 0

    async def read_chunk(self) -> bytes:
        chunk = self._view[self._offset:self._offset + self.chunk_size].tobytes()
        self._offset += len(chunk)
        return chunk

    async def _release(self) -> None:
        self._view.release()


class MemoryBlobStore(BlobStore):
    def __init__(self, chunk_size: int = CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._blobs: dict[str, bytes] = {}

    async def init(self) -> None:
        self._blobs = {}

    async def shutdown(self) -> None:
        self._blobs.clear()

    async def put(self, content: bytes, suggested_name: str) -> StoredBlob:
        storage_path = make_storage_name(suggested_name)
        while storage_path in self._blobs:
            storage_path = make_storage_name(suggested_name)
        data = bytes(content)
        self._blobs[storage_path] = data
        return StoredBlob(storage_path=storage_path, size=len(data))

    async def open_read(self, storage_path: str) -> BlobStream:
        try:
            data = self._blobs[storage_path]
        except KeyError:
            raise NotFoundError() from None
        return MemoryBlobStream(data, self.chunk_size)

    async def remove(self, storage_path: str) -> bool:
        return self._blobs.pop(storage_path, None) is not None

    async def exists(self, storage_path: str) -> bool:
        return storage_path in self._blobs
