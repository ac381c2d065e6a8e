from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docvault.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from docvault.api.fastapi.middleware.errors.handlers import register_error_handlers
from docvault.api.fastapi.middleware.request_size_limit import MULTIPART_OVERHEAD, RequestSizeLimitMiddleware
from docvault.api.fastapi.routers import register_all_routers
from docvault.app import CURRENT_ENVIRONMENT
from docvault.app.settings import DocVaultSettings, get_settings
from docvault.documents.service import DocumentService
from docvault.records import MemoryMetadataStore, MetadataStore, SqlMetadataStore
from docvault.storage import BlobStore, LocalBlobStore, MemoryBlobStore

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/documents/upload"


def build_stores(settings: DocVaultSettings) -> tuple[BlobStore, MetadataStore]:
    """Pick the blob and metadata backends for STORAGE_BACKEND."""
    if settings.storage_backend == "memory":
        return MemoryBlobStore(), MemoryMetadataStore()
    return (
        LocalBlobStore(settings.upload_dir),
        SqlMetadataStore.from_url(settings.resolved_database_url, echo=settings.db_echo),
    )


def create_app(
        settings: Optional[DocVaultSettings] = None,
        *,
        blob_store: Optional[BlobStore] = None,
        metadata_store: Optional[MetadataStore] = None,
) -> FastAPI:
    """Build the docvault API.

    Stores are created here (or injected) and owned by the app: ``init`` runs
    on startup, ``shutdown`` on exit. Each app gets its own stores, so tests
    can create as many isolated apps as they like.
    """
    settings = settings or get_settings()
    if blob_store is None or metadata_store is None:
        default_blobs, default_records = build_stores(settings)
        blob_store = blob_store or default_blobs
        metadata_store = metadata_store or default_records

    service = DocumentService(blob_store, metadata_store, max_file_size=settings.max_file_size)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.init()
        app.state.documents = service
        logger.info(
            f"{settings.app_version} version of {settings.app_name} started "
            f"[env: {CURRENT_ENVIRONMENT}, storage: {settings.storage_backend}]"
        )
        try:
            yield
        finally:
            await service.shutdown()
            logger.info(f"{settings.app_name} shut down")

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_file_size + MULTIPART_OVERHEAD,
        paths=(UPLOAD_PATH,),
        message=service.too_large_message,
    )
    app.add_middleware(CatchAllExceptionMiddleware)
    # CORS is added last so it wraps error responses too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    register_all_routers(app, base_package="docvault.api.fastapi.routers")
    return app


__all__ = ["build_stores", "create_app"]
