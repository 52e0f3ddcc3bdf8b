from __future__ import annotations

import math
from typing import Any

from pydantic import ConfigDict, JsonValue, TypeAdapter, ValidationError

# null | bool | int | float | str | list[Document] | dict[str, Document]
Document = JsonValue

# NaN/Infinity are not JSON, and JSONResponse refuses to render them.
_STRICT_JSON = ConfigDict(allow_inf_nan=False)

DOCUMENT_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue, config=_STRICT_JSON)
BATCH_ADAPTER: TypeAdapter[dict[str, JsonValue]] = TypeAdapter(dict[str, JsonValue], config=_STRICT_JSON)


class InvalidDocument(ValueError):
    """Raised when a request body is not an acceptable document."""


def parse_document(raw: bytes | str) -> Document:
    """
    Parse a JSON request body into a Document.

    Raises InvalidDocument for anything that is not a single JSON value,
    including NaN, Infinity and numbers that overflow to infinity (1e400).
    """
    try:
        doc = DOCUMENT_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise InvalidDocument(_first_error(e)) from e
    _require_finite(doc)
    return doc


def parse_batch(raw: bytes | str) -> dict[str, Document]:
    """
    Parse a JSON object body mapping keys to documents.

    The whole body is validated before anything is returned, so callers can
    reject it without having touched the store.
    """
    try:
        batch = BATCH_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise InvalidDocument(_first_error(e)) from e
    if "" in batch:
        raise InvalidDocument("document keys must be non-empty strings")
    _require_finite(batch)
    return batch


def _require_finite(doc: Document) -> None:
    # Iterative so deeply nested documents cannot exhaust the recursion limit.
    pending: list[Any] = [doc]
    while pending:
        value = pending.pop()
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidDocument(f"out of range number: {value!r}")
        elif isinstance(value, dict):
            pending.extend(value.values())
        elif isinstance(value, list):
            pending.extend(value)


def _first_error(err: ValidationError) -> str:
    errors: list[dict[str, Any]] = err.errors()  # type: ignore[assignment]
    if not errors:
        return "invalid JSON document"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = str(first.get("msg", "invalid JSON document"))
    return f"{loc}: {msg}" if loc else msg
