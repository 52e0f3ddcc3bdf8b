from __future__ import annotations

import contextlib
import logging
import os
import time
from pathlib import Path

from fastapi import FastAPI, Request

from dotenv import load_dotenv

from fileutil import atomic_write_text, remove_quietly
from settings import VERSION, Settings, get_settings
from storage import ConcurrentDocumentStore, DocumentStore

logger = logging.getLogger(__name__)


def _lifespan_for(settings: Settings):
    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        pid_path = Path(settings.pid_path) if settings.pid_path else None
        if pid_path is not None:
            pid = os.getpid()
            atomic_write_text(pid_path, f"{pid}\n")
            logger.info("Pid is now: %d (written to %s)", pid, pid_path)
        try:
            yield
        finally:
            if pid_path is not None:
                remove_quietly(pid_path)

    return lifespan


def create_app(settings: Settings | None = None, store: DocumentStore | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.doc_endpoints import router as doc_router

    settings = settings or get_settings()
    if store is None:
        store = ConcurrentDocumentStore(settings.segment_count)

    app = FastAPI(title="docstore", version=VERSION, lifespan=_lifespan_for(settings))
    app.state.settings = settings
    app.state.store = store

    if settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            logger.info(
                "%s %s -> %d (%.2fms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            return response

    app.include_router(doc_router)

    return app


def __getattr__(name: str):
    # `uvicorn app:app` resolves this on first access; importing create_app alone builds nothing.
    if name == "app":
        built = create_app()
        globals()["app"] = built
        return built
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
