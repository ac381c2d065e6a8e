"""Input and output shapes of the documents API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from docvault.records import DocumentRecord

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class UploadRequest:
    """One file as received at the HTTP boundary.

    ``declared_mime_type`` and ``declared_size`` come from the client and are
    only used for rejection; the stored size is always the byte count written.
    """

    content: bytes
    declared_mime_type: str | None
    declared_size: int | None
    original_filename: str


class Envelope(BaseModel):
    """Every JSON response carries a success flag and a readable message."""

    success: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome")


class DocumentOut(BaseModel):
    """Public view of a document record. The storage path is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Document ID")
    filename: str = Field(..., description="Original filename")
    filesize: int = Field(..., description="File size in bytes")
    created_at: datetime = Field(..., description="Upload timestamp (UTC)")

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentOut":
        return cls.model_validate(record)


class UploadResponse(Envelope):
    document: DocumentOut


class DocumentListResponse(Envelope):
    documents: list[DocumentOut] = Field(default_factory=list, description="Newest first")


class HealthResponse(Envelope):
    timestamp: datetime
