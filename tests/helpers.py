"""Payload helpers shared by the test modules."""

from __future__ import annotations

from docvault.documents import UploadRequest


def make_pdf(size: int = 1024, seed: int = 0) -> bytes:
    """Return ``size`` bytes that start with a PDF header.

    Content is not a valid PDF; nothing in the service parses it.
    """
    header = b"%PDF-1.4\n"
    body = bytes((i * 31 + seed) % 256 for i in range(max(size - len(header), 0)))
    return (header + body)[:size]


def upload_request(
    content: bytes | None = None,
    *,
    filename: str = "report.pdf",
    mime: str | None = "application/pdf",
    declared_size: int | None = None,
) -> UploadRequest:
    content = make_pdf() if content is None else content
    return UploadRequest(
        content=content,
        declared_mime_type=mime,
        declared_size=len(content) if declared_size is None else declared_size,
        original_filename=filename,
    )
