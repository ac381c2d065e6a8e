"""PDF document management: upload, list, download and delete.

The service couples each metadata record with its blob; the HTTP routes live
in ``docvault.api.fastapi.routers.documents``.
"""

from .models import PDF_MIME_TYPE, DocumentOut, UploadRequest
from .service import DocumentService

__all__ = ["DocumentService", "DocumentOut", "UploadRequest", "PDF_MIME_TYPE"]
