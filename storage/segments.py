from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .document import Document

DEFAULT_SEGMENT_COUNT = 32

_FNV32_OFFSET_BASIS = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def fnv1a_32(data: bytes) -> int:
    h = _FNV32_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
    return h


@dataclass
class Segment:
    """
    One partition of the key space. `docs` is only touched while `lock` is held.
    """

    lock: threading.Lock = field(default_factory=threading.Lock)
    docs: dict[str, Document] = field(default_factory=dict)


class SegmentTable:
    """
    Fixed set of independently locked segments, addressed by FNV-1a of the key.

    The table never changes shape after construction.
    """

    def __init__(self, count: int = DEFAULT_SEGMENT_COUNT) -> None:
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"segment count must be a positive integer, got {count!r}")
        self._segments: tuple[Segment, ...] = tuple(Segment() for _ in range(count))

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def index_for(self, key: str) -> int:
        return fnv1a_32(key.encode("utf-8", "surrogatepass")) % len(self._segments)

    def segment_for(self, key: str) -> Segment:
        return self._segments[self.index_for(key)]
