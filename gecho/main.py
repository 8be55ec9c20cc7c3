"""FastAPI app entrypoint and command line for gecho."""
from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError
from starlette.routing import request_response

from gecho.api.echo import echo
from gecho.api.errors import register_exception_handlers
from gecho.api.middleware import RequestLogMiddleware
from gecho.config import Settings
from gecho.logger import build_logger

APP_VERSION = "1.1.0"

USAGE = """Usage: gecho [options]

A simple http "echo" server written in Python

Options:
  -h, --help       Show this help message and exit
  -l, --listen     Listen address (default: ":8090")
  -t, --timeout    Server timeout in seconds (default: 60)
      --log-level  Log level (default: INFO)
  -v, --version    Show version and exit

Example: gecho --listen 0.0.0.0:80
"""


def create_app(settings: Settings, logger: logging.Logger) -> FastAPI:
    """Create and configure the echo application."""

    app = FastAPI(title="gecho", version=APP_VERSION, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.logger = logger
    register_exception_handlers(app, logger)

    app.add_middleware(RequestLogMiddleware, logger=logger)
    # no method filter: every verb on every path reaches the handler
    app.mount("", request_response(echo), name="echo")

    return app


class _Parser(argparse.ArgumentParser):
    def print_usage(self, file=None) -> None:
        (file or sys.stderr).write(USAGE)

    def print_help(self, file=None) -> None:
        (file or sys.stdout).write(USAGE)

    def error(self, message: str):
        sys.stderr.write(f"{self.prog}: {message}\n")
        self.print_usage()
        sys.exit(2)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="gecho", add_help=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-l", "--listen", metavar="ADDR")
    parser.add_argument("-t", "--timeout", metavar="SECONDS", type=int)
    parser.add_argument("--log-level", metavar="LEVEL")
    parser.add_argument("-v", "--version", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse flags, then serve until the process is stopped."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        sys.exit(0)

    if args.version:
        print(APP_VERSION)
        sys.exit(0)

    try:
        settings = Settings.from_env(listen=args.listen, timeout=args.timeout, log_level=args.log_level)
    except (ValidationError, ValueError) as e:
        sys.stderr.write(f"gecho: invalid configuration: {e}\n")
        sys.exit(2)

    logger = build_logger(settings.log_level)
    app = create_app(settings, logger)

    logger.info("Starting server at address %s", settings.listen)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.timeout,
        access_log=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
