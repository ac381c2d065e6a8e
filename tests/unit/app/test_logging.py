from __future__ import annotations

import io
import json
import logging

from docvault.app.core.env import Env, _normalize, get_env, pick
from docvault.app.core.logging import JsonFormatter, setup_logging


def _emit(formatter: logging.Formatter, msg: str, **extra) -> str:
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(formatter)
    logger = logging.getLogger("test.docvault.json")
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(logging.INFO)
    logger.error(msg, extra=extra)
    return buf.getvalue()


def test_json_formatter_includes_document_context():
    payload = json.loads(
        _emit(JsonFormatter(), "Dangling record", document_id=7, storage_path="1-2-x.pdf")
    )

    assert payload["message"] == "Dangling record"
    assert payload["level"] == "ERROR"
    assert payload["document"] == {"document_id": 7, "storage_path": "1-2-x.pdf"}
    assert "http" not in payload


def test_json_formatter_includes_http_context():
    payload = json.loads(
        _emit(JsonFormatter(), "boom", http_method="GET", path="/documents/1", status_code=500)
    )

    assert payload["http"] == {"method": "GET", "path": "/documents/1", "status": 500}


def test_setup_logging_respects_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_FORMAT", "json")

    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    try:
        setup_logging()

        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_env_synonyms():
    assert _normalize("production") is Env.PROD
    assert _normalize("Development") is Env.DEV
    assert _normalize("test") is Env.TEST
    assert _normalize("staging") is None
    assert _normalize(None) is None


def test_node_env_drives_pick_when_app_env_unset(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.setenv("NODE_ENV", "production")
    get_env.cache_clear()
    try:
        assert get_env() is Env.PROD
        assert pick(prod="json", nonprod="plain") == "json"
    finally:
        get_env.cache_clear()
