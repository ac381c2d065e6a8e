from .local import LocalBlobStore
from .memory import MemoryBlobStore

__all__ = ["LocalBlobStore", "MemoryBlobStore"]
