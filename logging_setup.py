"""Central logging configuration.

Routes the root logger and uvicorn's loggers through one handler: stdout by
default, or an append-mode log file when a path is configured.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def build_logging_config(log_path: str | None = None, level: str = "INFO") -> dict[str, Any]:
    if log_path:
        handler: dict[str, Any] = {
            "class": "logging.FileHandler",
            "level": level,
            "formatter": "default",
            "filename": log_path,
            "encoding": "utf-8",
        }
    else:
        handler = {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": _FORMAT}},
        "handlers": {"main": handler},
        "root": {"level": level, "handlers": ["main"]},
        "loggers": {
            "uvicorn": {"level": level, "handlers": ["main"], "propagate": False},
            "uvicorn.error": {"level": level, "handlers": ["main"], "propagate": False},
            "uvicorn.access": {"level": level, "handlers": ["main"], "propagate": False},
        },
    }


def configure_logging(log_path: str | None = None, level: str = "INFO", *, force: bool = False) -> None:
    """Configure application-wide logging once.

    Returns early if the root logger already has handlers, unless force is set.
    """
    root = logging.getLogger()
    if root.handlers and not force:
        return
    dictConfig(build_logging_config(log_path, level))
