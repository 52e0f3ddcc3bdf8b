from __future__ import annotations

import dataclasses
from pathlib import Path
import sys


import pytest
from fastapi.testclient import TestClient


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import storage...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch):
    """
    Settings built from a clean environment so a developer's local.env/exports never leak in.
    """
    for name in (
        "DOCSTORE_BIND",
        "DOCSTORE_LOG_PATH",
        "DOCSTORE_PID_PATH",
        "DOCSTORE_SEGMENTS",
        "DEBUG_LOG_REQUESTS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    from settings import get_settings

    return dataclasses.replace(get_settings(), segment_count=8)


@pytest.fixture
def store(settings):
    from storage import ConcurrentDocumentStore

    return ConcurrentDocumentStore(settings.segment_count)


@pytest.fixture
def client(settings, store):
    import app as app_module

    with TestClient(app_module.create_app(settings=settings, store=store)) as c:
        yield c
