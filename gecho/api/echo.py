"""
Echo endpoint.

Every method on every path is answered with a JSON description of the
request. HTTP layer responsibilities:
- Pull headers, query, peer and body out of the request
- Delegate the transformation to gecho.service.reflector
- Write the result as indented JSON

The only failure branch is an unreadable body (500, plain text).
"""
from __future__ import annotations

import asyncio
import json
import uuid
from decimal import Decimal
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from gecho.api.errors import BodyReadError, body_read_failed
from gecho.api.middleware import remote_addr
from gecho.service.netaddr import join_host_port
from gecho.service.reflector import flatten, flatten_headers, reflect

_DEFAULT_PORTS = {"http": 80, "https": 443}


class _DecimalEncoder(json.JSONEncoder):
    """Encoder writing Decimal values as bare JSON numbers."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._nonce = uuid.uuid4().hex
        self.numbers: dict[str, str] = {}

    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            token = f"@{self._nonce}:{len(self.numbers)}@"
            self.numbers[f'"{token}"'] = str(o)
            return token
        return super().default(o)

    def encode(self, o: Any) -> str:
        text = super().encode(o)
        for token, number in self.numbers.items():
            text = text.replace(token, number)
        return text


class PrettyJSONResponse(JSONResponse):
    """JSON response indented by two spaces, non-ASCII and HTML characters left as-is."""

    def render(self, content: Any) -> bytes:
        encoder = _DecimalEncoder(ensure_ascii=False, allow_nan=False, indent=2)
        return (encoder.encode(content) + "\n").encode("utf-8")


def request_host(request: Request, host: str | None) -> str:
    """Return the Host header value, or the server address of the connection."""
    if host is not None:
        return host
    server = request.scope.get("server")
    if not server:
        return ""
    name, port = server
    if port is None or port == _DEFAULT_PORTS.get(request.scope.get("scheme", "http")):
        return f"[{name}]" if ":" in name else name
    return join_host_port(name, port)


def request_target(request: Request) -> str:
    """Return the raw path plus ``?query`` when the query string is not empty."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").partition("?")[0]
    else:
        path = request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


async def read_body(request: Request, timeout: float) -> str:
    """Read the whole body as text, raising BodyReadError on transport failure."""
    try:
        body = await asyncio.wait_for(request.body(), timeout=timeout)
    except (ClientDisconnect, asyncio.TimeoutError, OSError) as exc:
        raise BodyReadError(repr(exc)) from exc
    return body.decode("utf-8", errors="replace")


async def echo(request: Request):
    """Reflect the request back to the caller."""
    headers = flatten_headers(request.headers.raw)
    host = headers.pop("Host", None)
    params = flatten(request.query_params.multi_items())

    try:
        data = await read_body(request, request.app.state.settings.timeout)
    except BodyReadError as exc:
        request.app.state.logger.error("error reading the request body: %s", exc)
        return body_read_failed()

    response = reflect(
        method=request.method,
        headers=headers,
        params=params,
        host=request_host(request, host),
        target=request_target(request),
        remote_addr=remote_addr(request.scope),
        data=data,
    )
    return PrettyJSONResponse(response.to_payload())
