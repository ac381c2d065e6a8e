"""Error taxonomy shared by the stores, the document service and the HTTP layer.

Every error carries a client-safe ``message`` and the ``status_code`` the HTTP
layer answers with. Internal detail (paths, driver errors) goes in the log,
never in ``message``.
"""

from __future__ import annotations


class DocVaultError(Exception):
    """Base class for all docvault errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DocVaultError):
    """Request rejected before any store was touched."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(DocVaultError):
    status_code = 404
    default_message = "Document not found"


class IntegrityError(NotFoundError):
    """A live record points at a blob that no longer exists.

    Surfaced to clients exactly like ``NotFoundError``.
    """


class InvalidStoragePathError(NotFoundError):
    """Storage path escapes the blob store root or is otherwise malformed."""


class StorageWriteError(DocVaultError):
    default_message = "Failed to store document"


class PersistenceError(DocVaultError):
    default_message = "Failed to save document metadata"


__all__ = [
    "DocVaultError",
    "ValidationError",
    "NotFoundError",
    "IntegrityError",
    "InvalidStoragePathError",
    "StorageWriteError",
    "PersistenceError",
]
