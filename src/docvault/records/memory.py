"""Ephemeral metadata store. Nothing survives a restart."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from docvault.exceptions import NotFoundError

from .base import DocumentRecord, MetadataStore, utcnow


class MemoryMetadataStore(MetadataStore):
    def __init__(self) -> None:
        self._records: dict[int, DocumentRecord] = {}
        self._last_id = 0
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        self._records = {}
        self._last_id = 0

    async def shutdown(self) -> None:
        self._records.clear()

    async def insert(self, filename: str, storage_path: str, filesize: int) -> DocumentRecord:
        async with self._lock:
            self._last_id += 1
            record = DocumentRecord(
                id=self._last_id,
                filename=filename,
                storage_path=storage_path,
                filesize=filesize,
                created_at=utcnow(),
            )
            self._records[record.id] = record
        return record

    async def list_all(self) -> Sequence[DocumentRecord]:
        return sorted(self._records.values(), key=lambda r: (r.created_at, r.id), reverse=True)

    async def get_by_id(self, document_id: int) -> Optional[DocumentRecord]:
        return self._records.get(document_id)

    async def delete_by_id(self, document_id: int) -> None:
        if self._records.pop(document_id, None) is None:
            raise NotFoundError()
