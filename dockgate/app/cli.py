from __future__ import annotations

import argparse
import logging
from typing import Any

import uvicorn
from pydantic import ValidationError

from .logging_setup import configure_logging
from .main import create_app
from .settings import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # `-h` is the upstream host, so help is only reachable as `--help`.
    parser = argparse.ArgumentParser(
        prog="dockgate",
        description="HTTP/SSE control gateway for a single container behind a Docker Engine API.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Print this message and exit")
    parser.add_argument("-n", "--name", help="Container name or id")
    parser.add_argument("-h", "--host", help="Upstream engine host (default 127.0.0.1)")
    parser.add_argument("-p", "--port", type=int, help="Upstream engine port (default 2375)")
    parser.add_argument("--path", help="Path to static assets (default static/)")
    parser.add_argument("--bind", help="Listen address (default 0.0.0.0)")
    parser.add_argument("--listen-port", type=int, help="Listen port (default 3000)")
    parser.add_argument("--poll-interval", type=float, dest="poll_interval_seconds", help="Log poll period in seconds")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    # Flags given on the command line win over DOCKGATE_* environment values.
    overrides: dict[str, Any] = {k: v for k, v in vars(args).items() if v is not None}
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        parser.error(f"invalid configuration: {e.errors()[0].get('loc')} {e.errors()[0].get('msg')}")

    configure_logging(settings.log_level)
    logger.info(
        "dockgate container=%s engine=%s listen=%s:%s",
        settings.name,
        settings.engine_base_url,
        settings.bind,
        settings.listen_port,
    )
    app = create_app(settings)
    uvicorn.run(app, host=settings.bind, port=settings.listen_port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
