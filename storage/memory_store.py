from __future__ import annotations

import copy
import logging
from typing import Iterable, Mapping

from .document import Document
from .interfaces import DocumentStore
from .segments import DEFAULT_SEGMENT_COUNT, SegmentTable

logger = logging.getLogger(__name__)


class ConcurrentDocumentStore(DocumentStore):
    """
    In-memory document store partitioned into independently locked segments.

    - Point operations lock only the segment that owns the key, so different
      keys rarely contend and the same key is always serialized.
    - items()/keys()/count() visit the segments one at a time and never hold
      two segment locks at once. The result is snapshot-like: every entry was
      present at some instant during the call, but writes racing with the
      walk may or may not show up.
    - Documents are deep-copied on the way in and on the way out, outside the
      lock, so callers can never mutate stored state in place.
    """

    def __init__(self, segment_count: int = DEFAULT_SEGMENT_COUNT) -> None:
        self._table = SegmentTable(segment_count)
        logger.debug("document store created with %d segments", len(self._table))

    @property
    def segment_count(self) -> int:
        return len(self._table)

    def get(self, key: str) -> tuple[Document, bool]:
        seg = self._table.segment_for(key)
        with seg.lock:
            if key not in seg.docs:
                return None, False
            doc = seg.docs[key]
        # Stored values are never mutated in place.
        return copy.deepcopy(doc), True

    def set(self, key: str, doc: Document) -> None:
        stored = copy.deepcopy(doc)
        seg = self._table.segment_for(key)
        with seg.lock:
            seg.docs[key] = stored

    def set_many(self, docs: Mapping[str, Document]) -> None:
        for key, doc in docs.items():
            self.set(key, doc)

    def remove(self, key: str) -> None:
        seg = self._table.segment_for(key)
        with seg.lock:
            seg.docs.pop(key, None)

    def items(self) -> dict[str, Document]:
        out: dict[str, Document] = {}
        for chunk in self._walk():
            out.update(chunk)
        return {k: copy.deepcopy(v) for k, v in out.items()}

    def keys(self) -> list[str]:
        out: list[str] = []
        for seg in self._table:
            with seg.lock:
                out.extend(seg.docs.keys())
        return out

    def count(self) -> int:
        total = 0
        for seg in self._table:
            with seg.lock:
                total += len(seg.docs)
        return total

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        seg = self._table.segment_for(key)
        with seg.lock:
            return key in seg.docs

    def _walk(self) -> Iterable[dict[str, Document]]:
        # Shallow copy per segment; the lock is released before the caller sees it.
        for seg in self._table:
            with seg.lock:
                chunk = dict(seg.docs)
            yield chunk
