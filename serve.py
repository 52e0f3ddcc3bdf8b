from __future__ import annotations

import argparse
import dataclasses
import logging

import uvicorn

from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-memory JSON document store over HTTP")
    parser.add_argument("--bind", help="bind address and port, e.g. :8080 or 127.0.0.1:9000")
    parser.add_argument("--log", help="path to log file (default: stdout)")
    parser.add_argument("--pid", help="path to pid file (default: none)")
    parser.add_argument("--segments", type=int, help="number of independently locked store segments")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, ...)")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """
    Command-line flags override the environment; unset flags keep env values.
    """
    overrides: dict[str, object] = {}
    if args.bind is not None:
        overrides["bind_addr"] = args.bind
    if args.log is not None:
        overrides["log_path"] = args.log or None
    if args.pid is not None:
        overrides["pid_path"] = args.pid or None
    if args.segments is not None:
        if args.segments < 1:
            raise ValueError(f"--segments must be >= 1, got {args.segments}")
        overrides["segment_count"] = args.segments
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.upper()
    if base is None:
        return get_settings(**overrides)
    return dataclasses.replace(base, **overrides)


def main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    from app import create_app
    from logging_setup import configure_logging

    load_dotenv("local.env")
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    host, port = settings.bind_host_port()

    configure_logging(settings.log_path, settings.log_level)
    logger.info("starting docstore on %s:%d (%d segments)", host, port, settings.segment_count)

    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_config=None,
        log_level=settings.log_level.lower(),
        # The request-logging middleware replaces uvicorn's access log when enabled.
        access_log=not settings.debug_log_requests,
    )


if __name__ == "__main__":
    main()
