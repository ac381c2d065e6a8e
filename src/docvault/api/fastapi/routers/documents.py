"""REST endpoints for PDF documents.

    POST   /documents/upload   multipart field "document"
    GET    /documents          newest first
    GET    /documents/{id}     raw PDF bytes
    DELETE /documents/{id}
"""

from __future__ import annotations

from typing import AsyncIterator, Optional
from urllib.parse import quote

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from docvault.api.fastapi.deps import DocumentServiceDep
from docvault.documents.models import (
    PDF_MIME_TYPE,
    DocumentListResponse,
    DocumentOut,
    Envelope,
    UploadRequest,
    UploadResponse,
)
from docvault.exceptions import ValidationError
from docvault.storage import BlobStream

ROUTER_PREFIX = "/documents"
ROUTER_TAG = "Documents"

router = APIRouter()


def content_disposition(filename: str) -> str:
    """``attachment`` header naming the original file.

    Non-ASCII names get an ASCII fallback plus an RFC 5987 ``filename*``.
    """
    safe = filename.replace("\\", "_").replace('"', "_").replace("\r", "").replace("\n", "")
    ascii_name = safe.encode("ascii", "replace").decode("ascii").replace("?", "_")
    if ascii_name == safe:
        return f'attachment; filename="{safe}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(safe, safe='')}"


async def _iter_blob(stream: BlobStream) -> AsyncIterator[bytes]:
    async with stream:
        async for chunk in stream:
            yield chunk


@router.post("/upload", response_model=UploadResponse)
async def upload_document(
    service: DocumentServiceDep,
    document: Optional[UploadFile] = File(None),
) -> UploadResponse:
    if document is None:
        raise ValidationError("No file uploaded or invalid file type")
    try:
        # one byte past the limit is enough to know it is too large
        content = await document.read(service.max_file_size + 1)
    finally:
        await document.close()

    record = await service.upload(
        UploadRequest(
            content=content,
            declared_mime_type=document.content_type,
            declared_size=document.size,
            original_filename=document.filename or "",
        )
    )
    return UploadResponse(
        success=True,
        message="File uploaded successfully",
        document=DocumentOut.from_record(record),
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(service: DocumentServiceDep) -> DocumentListResponse:
    records = await service.list()
    return DocumentListResponse(
        success=True,
        message="Documents retrieved successfully",
        documents=[DocumentOut.from_record(r) for r in records],
    )


@router.get(
    "/{document_id}",
    response_class=StreamingResponse,
    responses={200: {"content": {PDF_MIME_TYPE: {}}}, 404: {"model": Envelope}},
)
async def download_document(document_id: int, service: DocumentServiceDep) -> StreamingResponse:
    record, stream = await service.download(document_id)
    return StreamingResponse(
        _iter_blob(stream),
        media_type=PDF_MIME_TYPE,
        headers={
            "Content-Disposition": content_disposition(record.filename),
            "Content-Length": str(stream.size),
        },
        # closes the blob even if the body iterator is never consumed
        background=BackgroundTask(stream.aclose),
    )


@router.delete("/{document_id}", response_model=Envelope, responses={404: {"model": Envelope}})
async def delete_document(document_id: int, service: DocumentServiceDep) -> Envelope:
    await service.delete(document_id)
    return Envelope(success=True, message="Document deleted successfully")
