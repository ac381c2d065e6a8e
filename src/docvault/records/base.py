from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class DocumentRecord:
    """Metadata of one stored document. Immutable once created."""

    id: int
    filename: str
    storage_path: str
    filesize: int
    created_at: dt.datetime


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class MetadataStore(ABC):
    """Table of ``DocumentRecord`` rows.

    ``list_all`` order (newest first) is part of the public API contract.
    """

    async def init(self) -> None:
        """Allocate backing storage (create tables, reset state)."""

    async def shutdown(self) -> None:
        """Flush and release backing storage."""

    @abstractmethod
    async def insert(self, filename: str, storage_path: str, filesize: int) -> DocumentRecord:
        """Create a record with a fresh id and timestamp; raises ``PersistenceError``."""

    @abstractmethod
    async def list_all(self) -> Sequence[DocumentRecord]: ...

    @abstractmethod
    async def get_by_id(self, document_id: int) -> Optional[DocumentRecord]: ...

    @abstractmethod
    async def delete_by_id(self, document_id: int) -> None:
        """Remove a record; raises ``NotFoundError`` if it does not exist."""
