from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(text)
    tmp_path.replace(path)


def remove_quietly(path: Path) -> None:
    """
    Delete path if it exists. Failures are logged, not raised.
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("could not remove %s: %r", path, e)
