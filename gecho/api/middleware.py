"""Request logging middleware."""
from __future__ import annotations

import logging
import time

from starlette.types import ASGIApp, Receive, Scope, Send

from gecho.service.netaddr import join_host_port


def remote_addr(scope: Scope) -> str:
    """Render the transport peer of ``scope`` as ``host:port``."""
    client = scope.get("client")
    if not client:
        return ""
    host, port = client
    return join_host_port(host, port)


class RequestLogMiddleware:
    """Log method, path, peer and elapsed time once a request has been handled."""

    def __init__(self, app: ASGIApp, logger: logging.Logger) -> None:
        self.app = app
        self.logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        try:
            await self.app(scope, receive, send)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            self.logger.info(
                "handled request method=%s path=%s addr=%s elapsed=%.3fms",
                scope["method"], scope["path"], remote_addr(scope), elapsed,
            )
