"""
Acceptance tests for the documents API.

These tests drive the full app (lifespan, middleware, both storage backends):
- upload / list / download / delete round trip
- newest-first listing
- oversize and non-PDF rejection leave nothing behind
- durability of the disk backend across app restarts
"""

from __future__ import annotations

import os
from datetime import datetime
from io import BytesIO

import pytest
from starlette.testclient import TestClient

from docvault.api.fastapi import create_app
from tests.helpers import make_pdf

pytestmark = pytest.mark.acceptance


def _upload(client, content: bytes, filename: str = "report.pdf", content_type: str = "application/pdf"):
    return client.post(
        "/documents/upload",
        files={"document": (filename, BytesIO(content), content_type)},
    )


def test_report_pdf_round_trip(client):
    """
    Given an empty store
    When report.pdf (1024 bytes) is uploaded, listed, downloaded and deleted
    Then every step reports the same document and the delete is final
    """
    content = make_pdf(1024)

    r = _upload(client, content)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["document"]["id"] == 1
    assert body["document"]["filename"] == "report.pdf"
    assert body["document"]["filesize"] == 1024
    datetime.fromisoformat(body["document"]["created_at"].replace("Z", "+00:00"))

    listed = client.get("/documents").json()["documents"]
    assert len(listed) == 1
    assert listed[0] == body["document"]

    dl = client.get("/documents/1")
    assert dl.status_code == 200
    assert dl.content == content
    assert 'filename="report.pdf"' in dl.headers["content-disposition"]
    assert dl.headers["content-disposition"].startswith("attachment")

    assert client.delete("/documents/1").json()["success"] is True
    gone = client.get("/documents/1")
    assert gone.status_code == 404
    assert gone.json()["success"] is False


def test_every_listed_document_downloads_identically(client):
    uploaded = {}
    for i in range(4):
        content = make_pdf(500 + i * 1000, seed=i)
        doc = _upload(client, content, filename=f"doc-{i}.pdf").json()["document"]
        uploaded[doc["id"]] = content

    listed = client.get("/documents").json()["documents"]
    assert [d["id"] for d in listed] == sorted(uploaded, reverse=True)
    assert len({d["id"] for d in listed}) == len(uploaded)

    for d in listed:
        assert client.get(f"/documents/{d['id']}").content == uploaded[d["id"]]


def test_rejections_leave_no_trace(client):
    assert _upload(client, b"plain text", filename="a.txt", content_type="text/plain").status_code == 400

    limit = client.app.state.settings.max_file_size
    too_big = _upload(client, make_pdf(limit + 1))
    assert too_big.status_code == 400
    assert too_big.json()["message"].startswith("File too large")

    assert client.get("/documents").json()["documents"] == []
    assert client.get("/documents/1").status_code == 404

    settings = client.app.state.settings
    if settings.storage_backend == "disk":
        assert os.listdir(settings.upload_dir) == []
    else:
        assert client.app.state.documents.blobs._blobs == {}


def test_delete_nonexistent_document(client):
    r = client.delete("/documents/999")

    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Document not found"}


def test_disk_backend_survives_restart(disk_settings):
    content = make_pdf(4096, seed=9)
    with TestClient(create_app(disk_settings)) as c:
        doc_id = _upload(c, content).json()["document"]["id"]

    with TestClient(create_app(disk_settings)) as c:
        assert [d["id"] for d in c.get("/documents").json()["documents"]] == [doc_id]
        assert c.get(f"/documents/{doc_id}").content == content
        # ids keep counting after a restart
        assert _upload(c, content, filename="again.pdf").json()["document"]["id"] == doc_id + 1


def test_memory_backend_is_ephemeral(memory_settings):
    with TestClient(create_app(memory_settings)) as c:
        assert _upload(c, make_pdf(10)).status_code == 200

    with TestClient(create_app(memory_settings)) as c:
        assert c.get("/documents").json()["documents"] == []
