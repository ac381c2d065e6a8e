"""Document metadata: one record per stored blob."""

from .base import DocumentRecord, MetadataStore
from .memory import MemoryMetadataStore
from .sql import SqlMetadataStore

__all__ = [
    "DocumentRecord",
    "MetadataStore",
    "MemoryMetadataStore",
    "SqlMetadataStore",
]
