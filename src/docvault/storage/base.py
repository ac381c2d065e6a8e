"""Blob store contract.

A blob store keeps raw bytes under generated names and never looks inside
them. Callers decide what is allowed in (the document service only lets
PDFs through).
"""

from __future__ import annotations

import re
import secrets
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath
from typing import AsyncIterator

CHUNK_SIZE = 64 * 1024

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredBlob:
    storage_path: str
    size: int


def make_storage_name(suggested_name: str) -> str:
    """Build a collision-free blob name from a client filename.

    ``<epoch-millis>-<9 random digits>-<sanitised basename>``. Directory parts
    of the suggested name are dropped so the result is always a single path
    segment.
    """
    base = PureWindowsPath(PurePosixPath(suggested_name or "").name).name
    base = _UNSAFE_CHARS.sub("_", base).strip("._") or "document"
    token = f"{time.time_ns() // 1_000_000}-{secrets.randbelow(10**9):09d}"
    return f"{token}-{base[:120]}"


class BlobStream(ABC):
    """Async byte-chunk iterator over one opened blob.

    The underlying resource is acquired when the stream is opened and released
    by ``aclose()``, which is safe to call more than once. Use it as an async
    context manager, or iterate it to exhaustion, to guarantee release.
    """

    def __init__(self, size: int, chunk_size: int = CHUNK_SIZE):
        self.size = size
        self.chunk_size = chunk_size
        self.closed = False

    @abstractmethod
    async def read_chunk(self) -> bytes:
        """Return the next chunk, or ``b""`` at end of blob."""

    async def _release(self) -> None:
        return None

    async def aclose(self) -> None:
        if self.closed:
            return
        self.closed = True
        await self._release()

    async def __aenter__(self) -> "BlobStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            while not self.closed:
                chunk = await self.read_chunk()
                if not chunk:
                    break
                yield chunk
        finally:
            await self.aclose()

    async def read_all(self) -> bytes:
        parts = [chunk async for chunk in self]
        return b"".join(parts)


class BlobStore(ABC):
    """Persists raw file bytes.

    ``put`` never overwrites: every call produces a fresh storage path.
    ``remove`` is idempotent so an interrupted delete can be retried.
    """

    async def init(self) -> None:
        """Allocate backing storage. Called once before first use."""

    async def shutdown(self) -> None:
        """Release backing storage. Called once at application exit."""

    @abstractmethod
    async def put(self, content: bytes, suggested_name: str) -> StoredBlob:
        """Store ``content``; raises ``StorageWriteError`` on failure."""

    @abstractmethod
    async def open_read(self, storage_path: str) -> BlobStream:
        """Open a blob for streaming; raises ``NotFoundError`` if absent."""

    @abstractmethod
    async def remove(self, storage_path: str) -> bool:
        """Delete a blob. Returns False when it was already gone."""

    @abstractmethod
    async def exists(self, storage_path: str) -> bool: ...
