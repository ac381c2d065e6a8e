"""Unit tests for MemoryBlobStore."""

import pytest

from docvault.exceptions import NotFoundError
from docvault.storage import MemoryBlobStore


@pytest.mark.storage
@pytest.mark.asyncio
class TestMemoryBlobStore:
    """Test suite for MemoryBlobStore."""

    async def test_put_and_read(self):
        store = MemoryBlobStore()
        await store.init()

        blob = await store.put(b"Hello, PDF", "hello.pdf")

        assert blob.size == 10
        stream = await store.open_read(blob.storage_path)
        assert await stream.read_all() == b"Hello, PDF"

    async def test_chunking(self):
        store = MemoryBlobStore(chunk_size=4)
        blob = await store.put(b"0123456789", "digits.pdf")

        stream = await store.open_read(blob.storage_path)
        chunks = [c async for c in stream]

        assert chunks == [b"0123", b"4567", b"89"]
        assert stream.closed

    async def test_open_missing(self):
        store = MemoryBlobStore()

        with pytest.raises(NotFoundError) as exc_info:
            await store.open_read("nope")

        assert "not found" in str(exc_info.value).lower()

    async def test_remove_is_idempotent(self):
        store = MemoryBlobStore()
        blob = await store.put(b"data", "x.pdf")

        assert await store.remove(blob.storage_path) is True
        assert await store.remove(blob.storage_path) is False
        assert not await store.exists(blob.storage_path)

    async def test_shutdown_drops_contents(self):
        store = MemoryBlobStore()
        blob = await store.put(b"data", "x.pdf")

        await store.shutdown()

        assert not await store.exists(blob.storage_path)

    async def test_stored_copy_is_independent_of_caller_buffer(self):
        store = MemoryBlobStore()
        buf = bytearray(b"abc")
        blob = await store.put(buf, "x.pdf")
        buf[0] = ord("z")

        assert await (await store.open_read(blob.storage_path)).read_all() == b"abc"
