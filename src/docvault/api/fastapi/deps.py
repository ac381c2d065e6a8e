from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from docvault.documents.service import DocumentService


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.documents  # type: ignore[attr-defined]


DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
