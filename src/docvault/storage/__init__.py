"""Blob storage: raw document bytes, independent of their metadata."""

from .backends import LocalBlobStore, MemoryBlobStore
from .base import BlobStore, BlobStream, StoredBlob, make_storage_name

__all__ = [
    "BlobStore",
    "BlobStream",
    "StoredBlob",
    "LocalBlobStore",
    "MemoryBlobStore",
    "make_storage_name",
]
