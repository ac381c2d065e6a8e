"""Document service: keeps each metadata record and its blob in step.

Ordering rules:
  - upload writes the blob first, then the record;
  - delete removes the blob first, then the record.

Neither step is rolled back. A failure between the two leaves an orphaned
blob (upload) or a dangling record (delete); both are logged at ERROR for
reconciliation and the caller gets a server error.
"""

from __future__ import annotations

import logging
from typing import Sequence

from docvault.app.settings import DEFAULT_MAX_FILE_SIZE
from docvault.exceptions import IntegrityError, NotFoundError, PersistenceError, ValidationError
from docvault.records import DocumentRecord, MetadataStore
from docvault.storage import BlobStore, BlobStream

from .models import PDF_MIME_TYPE, UploadRequest

logger = logging.getLogger(__name__)


def _format_limit(max_bytes: int) -> str:
    mb = max_bytes / (1024 * 1024)
    if mb >= 1:
        return f"{mb:g}MB"
    return f"{max_bytes} bytes"


class DocumentService:
    def __init__(
        self,
        blobs: BlobStore,
        records: MetadataStore,
        *,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        self.blobs = blobs
        self.records = records
        self.max_file_size = max_file_size

    async def init(self) -> None:
        await self.blobs.init()
        await self.records.init()

    async def shutdown(self) -> None:
        try:
            await self.records.shutdown()
        finally:
            await self.blobs.shutdown()

    @property
    def too_large_message(self) -> str:
        return f"File too large. Maximum size is {_format_limit(self.max_file_size)}."

    def validate(self, request: UploadRequest) -> None:
        """Reject an upload before any store is touched."""
        mime = (request.declared_mime_type or "").split(";", 1)[0].strip().lower()
        if mime != PDF_MIME_TYPE:
            raise ValidationError("Only PDF files are allowed")
        if request.declared_size is not None and request.declared_size > self.max_file_size:
            raise ValidationError(self.too_large_message)
        if len(request.content) > self.max_file_size:
            raise ValidationError(self.too_large_message)
        if not request.original_filename or not request.original_filename.strip():
            raise ValidationError("Filename is required")

    async def upload(self, request: UploadRequest) -> DocumentRecord:
        self.validate(request)

        blob = await self.blobs.put(request.content, request.original_filename)
        try:
            record = await self.records.insert(request.original_filename, blob.storage_path, blob.size)
        except PersistenceError:
            logger.error(
                "Orphaned blob: stored %s but its metadata insert failed; needs reconciliation",
                blob.storage_path,
                extra={"storage_path": blob.storage_path, "original_filename": request.original_filename},
            )
            raise

        logger.info(
            "Uploaded document %s (%s, %d bytes)", record.id, record.filename, record.filesize,
            extra={"document_id": record.id},
        )
        return record

    async def list(self) -> Sequence[DocumentRecord]:
        return await self.records.list_all()

    async def get(self, document_id: int) -> DocumentRecord:
        record = await self.records.get_by_id(document_id)
        if record is None:
            raise NotFoundError()
        return record

    async def download(self, document_id: int) -> tuple[DocumentRecord, BlobStream]:
        """Return the record and an opened stream; the caller must close the stream."""
        record = await self.get(document_id)
        try:
            stream = await self.blobs.open_read(record.storage_path)
        except NotFoundError as exc:
            logger.error(
                "Dangling record: document %s has no blob at %s",
                record.id,
                record.storage_path,
                extra={"document_id": record.id, "storage_path": record.storage_path},
            )
            raise IntegrityError() from exc
        return record, stream

    async def delete(self, document_id: int) -> DocumentRecord:
        record = await self.get(document_id)

        removed = await self.blobs.remove(record.storage_path)
        if not removed:
            logger.warning(
                "Blob for document %s was already missing at %s",
                record.id,
                record.storage_path,
                extra={"document_id": record.id, "storage_path": record.storage_path},
            )

        try:
            await self.records.delete_by_id(record.id)
        except PersistenceError:
            logger.error(
                "Dangling record: blob for document %s removed but the record delete failed; "
                "needs reconciliation",
                record.id,
                extra={"document_id": record.id, "storage_path": record.storage_path},
            )
            raise

        logger.info("Deleted document %s", record.id, extra={"document_id": record.id})
        return record
