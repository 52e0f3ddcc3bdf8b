from __future__ import annotations

from typing import Mapping, Protocol

from .document import Document


class DocumentStore(Protocol):
    """
    Key -> JSON document container shared by every request handler.

    Absent keys are results, not errors: nothing here raises on valid input.
    """

    def get(self, key: str) -> tuple[Document, bool]:
        """Return (document, True), or (None, False) if the key is not set."""
        ...

    def set(self, key: str, doc: Document) -> None:
        """Insert or replace the document stored under key."""
        ...

    def set_many(self, docs: Mapping[str, Document]) -> None:
        ...

    def remove(self, key: str) -> None:
        """Drop key if present; removing an absent key is a no-op."""
        ...

    def items(self) -> dict[str, Document]:
        ...

    def keys(self) -> list[str]:
        ...

    def count(self) -> int:
        ...
