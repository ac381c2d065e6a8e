"""
Root conftest.py for docvault tests.

This file provides:
1. Custom pytest markers
2. Settings fixtures pointing every store at a per-test temporary directory
3. PDF payload helpers
4. Blob/metadata store and DocumentService fixtures for both backends
5. HTTP client fixtures (lifespan-aware)
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import pytest_asyncio
from starlette.testclient import TestClient

from docvault.api.fastapi import create_app
from docvault.app.settings import DocVaultSettings
from docvault.documents import DocumentService
from docvault.records import MemoryMetadataStore, SqlMetadataStore
from docvault.storage import LocalBlobStore, MemoryBlobStore
from tests.helpers import make_pdf


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    # Registered here too in case pyproject.toml isn't picked up
    for name, desc in [
        ("storage", "Blob store backend tests"),
        ("records", "Metadata store backend tests"),
        ("documents", "Document service tests"),
        ("acceptance", "End-to-end HTTP scenarios"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# PAYLOAD HELPERS
# =============================================================================


@pytest.fixture
def pdf_factory() -> Callable[..., bytes]:
    return make_pdf


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def disk_settings(tmp_path: Path) -> DocVaultSettings:
    return DocVaultSettings(
        storage_backend="disk",
        upload_dir=str(tmp_path / "uploads"),
        db_name=str(tmp_path / "documents.db"),
        cors_origin="http://localhost:5173",
    )


@pytest.fixture
def memory_settings() -> DocVaultSettings:
    return DocVaultSettings(storage_backend="memory")


@pytest.fixture(params=["disk", "memory"])
def settings(request, disk_settings, memory_settings) -> DocVaultSettings:
    """Runs the test once per storage backend."""
    return disk_settings if request.param == "disk" else memory_settings


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest_asyncio.fixture(params=["disk", "memory"])
async def service(request, tmp_path: Path):
    """An initialised DocumentService, once per backend pair."""
    if request.param == "disk":
        blobs = LocalBlobStore(tmp_path / "uploads")
        records = SqlMetadataStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    else:
        blobs = MemoryBlobStore()
        records = MemoryMetadataStore()
    svc = DocumentService(blobs, records)
    await svc.init()
    try:
        yield svc
    finally:
        await svc.shutdown()


# =============================================================================
# HTTP FIXTURES
# =============================================================================


@pytest.fixture
def client(settings: DocVaultSettings):
    """TestClient for a fresh app; entering the context runs the lifespan."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def disk_client(disk_settings: DocVaultSettings):
    with TestClient(create_app(disk_settings)) as c:
        yield c
