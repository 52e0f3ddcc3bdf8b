from __future__ import annotations

from .document import Document, InvalidDocument, parse_batch, parse_document
from .interfaces import DocumentStore
from .memory_store import ConcurrentDocumentStore
from .segments import DEFAULT_SEGMENT_COUNT, SegmentTable, fnv1a_32

__all__ = [
    "Document",
    "InvalidDocument",
    "parse_document",
    "parse_batch",
    "DocumentStore",
    "ConcurrentDocumentStore",
    "DEFAULT_SEGMENT_COUNT",
    "SegmentTable",
    "fnv1a_32",
]
