"""Durable metadata store on async SQLAlchemy (SQLite by default)."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from docvault.db import Base, DBEngine, DocumentRow
from docvault.db.repository import Repository
from docvault.exceptions import NotFoundError, PersistenceError

from .base import DocumentRecord, MetadataStore, utcnow

logger = logging.getLogger(__name__)

# Newest first; ties (same timestamp) fall back to the later id.
_NEWEST_FIRST = (DocumentRow.created_at.desc(), DocumentRow.id.desc())


def _to_record(row: DocumentRow) -> DocumentRecord:
    created_at = row.created_at
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=dt.timezone.utc)
    return DocumentRecord(
        id=row.id,
        filename=row.filename,
        storage_path=row.filepath,
        filesize=row.filesize,
        created_at=created_at,
    )


class SqlMetadataStore(MetadataStore):
    def __init__(self, engine: DBEngine):
        self.db = engine

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False) -> "SqlMetadataStore":
        return cls(DBEngine(url, echo=echo))

    async def init(self) -> None:
        async with self.db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Metadata store ready at %s", self.db.url)

    async def shutdown(self) -> None:
        await self.db.dispose()
        logger.info("Metadata store connection closed")

    async def insert(self, filename: str, storage_path: str, filesize: int) -> DocumentRecord:
        try:
            async with self.db.transaction() as session:
                row = await Repository(session, DocumentRow).create(
                    filename=filename,
                    filepath=storage_path,
                    filesize=filesize,
                    created_at=utcnow(),
                )
                record = _to_record(row)
        except SQLAlchemyError as exc:
            logger.error("Insert failed for %s: %s", storage_path, exc)
            raise PersistenceError() from exc
        return record

    async def list_all(self) -> Sequence[DocumentRecord]:
        try:
            async with self.db.session() as session:
                rows = await Repository(session, DocumentRow).list(order_by=_NEWEST_FIRST)
        except SQLAlchemyError as exc:
            logger.error("Listing documents failed: %s", exc)
            raise PersistenceError("Failed to retrieve documents") from exc
        return [_to_record(r) for r in rows]

    async def get_by_id(self, document_id: int) -> Optional[DocumentRecord]:
        try:
            async with self.db.session() as session:
                row = await Repository(session, DocumentRow).get(document_id)
        except SQLAlchemyError as exc:
            logger.error("Lookup of document %s failed: %s", document_id, exc)
            raise PersistenceError("Failed to retrieve document") from exc
        return _to_record(row) if row is not None else None

    async def delete_by_id(self, document_id: int) -> None:
        try:
            async with self.db.transaction() as session:
                deleted = await Repository(session, DocumentRow).delete(document_id)
        except SQLAlchemyError as exc:
            logger.error("Delete of document %s failed: %s", document_id, exc)
            raise PersistenceError("Failed to delete document from database") from exc
        if not deleted:
            raise NotFoundError()
