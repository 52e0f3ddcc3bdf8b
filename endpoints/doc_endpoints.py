from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from storage import DocumentStore, InvalidDocument, parse_batch, parse_document

router = APIRouter(tags=["documents"])
logger = logging.getLogger(__name__)


def get_store(request: Request) -> DocumentStore:
    """
    The store is owned by the application instance, never by this module.
    """
    return request.app.state.store


# -------------------------------------------------------------------
# Service
# -------------------------------------------------------------------

@router.get("/status", response_class=PlainTextResponse)
def get_status() -> str:
    return "OK"


@router.get("/count")
def get_count(store: DocumentStore = Depends(get_store)) -> int:
    return store.count()


@router.get("/keys")
def get_keys(store: DocumentStore = Depends(get_store)) -> list[str]:
    return store.keys()


# -------------------------------------------------------------------
# Documents
# -------------------------------------------------------------------

@router.get("/doc")
def get_all(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    return JSONResponse(store.items())


@router.get("/doc/{key}")
def get_doc(key: str, store: DocumentStore = Depends(get_store)) -> JSONResponse:
    # Absent keys answer 200 null, same as a stored null.
    doc, _found = store.get(key)
    return JSONResponse(doc)


@router.put("/doc/{key}", status_code=204)
async def put_doc(key: str, request: Request, store: DocumentStore = Depends(get_store)) -> Response:
    raw = await request.body()
    try:
        doc = parse_document(raw)
    except InvalidDocument as e:
        logger.info("PUT /doc/%s rejected: %s", key, e)
        raise HTTPException(status_code=422, detail=f"invalid JSON document: {e}") from e

    # set() deep-copies the document; keep that off the event loop.
    await run_in_threadpool(store.set, key, doc)
    return Response(status_code=204)


@router.put("/doc", status_code=204)
async def put_many(request: Request, store: DocumentStore = Depends(get_store)) -> Response:
    raw = await request.body()
    try:
        batch: dict[str, Any] = parse_batch(raw)
    except InvalidDocument as e:
        logger.info("PUT /doc rejected: %s", e)
        raise HTTPException(status_code=422, detail=f"expected a JSON object of documents: {e}") from e

    await run_in_threadpool(store.set_many, batch)
    return Response(status_code=204)


@router.delete("/doc/{key}", status_code=204)
def delete_doc(key: str, store: DocumentStore = Depends(get_store)) -> Response:
    store.remove(key)
    return Response(status_code=204)
