from .exceptions import (
    DocVaultError,
    IntegrityError,
    NotFoundError,
    PersistenceError,
    StorageWriteError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "DocVaultError",
    "IntegrityError",
    "NotFoundError",
    "PersistenceError",
    "StorageWriteError",
    "ValidationError",
    "__version__",
]
