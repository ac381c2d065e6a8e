"""ASGI entrypoint: ``uvicorn docvault.main:app``."""

from docvault.api.fastapi import create_app
from docvault.app.core.logging import setup_logging

setup_logging()

app = create_app()
