"""
Request reflector.

Pure functions turning the parts of an HTTP request into an EchoResponse:
- flatten multi-valued headers and query parameters
- rebuild the external URL (X-Forwarded-Proto aware)
- resolve the client origin
- sniff the body for a JSON document

This module MUST NOT do I/O; the API layer reads the body and writes the reply.
"""
from __future__ import annotations

import json
from decimal import Decimal
from collections.abc import Iterable
from typing import Any

from gecho.service.models import EchoResponse
from gecho.service.netaddr import split_host_port

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

# Origin headers, most to least trusted. X-Forwarded-For is handled apart.
CF_CONNECTING_IP = "Cf-Connecting-Ip"
X_REAL_IP = "X-Real-Ip"
X_FORWARDED_FOR = "X-Forwarded-For"
X_FORWARDED_PROTO = "X-Forwarded-Proto"


class NotJSON(Exception):
    """Raised when a request body is not a JSON document."""


def canonical_header_key(name: str) -> str:
    """Return the MIME canonical form of a header name (``content-type`` -> ``Content-Type``)."""
    if not name or any(ch not in _TOKEN_CHARS for ch in name):
        return name
    out = []
    upper = True
    for ch in name:
        out.append(ch.upper() if upper else ch.lower())
        upper = ch == "-"
    return "".join(out)


def flatten(items: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Collapse ``(name, value)`` pairs into ``name -> "v1,v2"``.

    Names keep the order of their first appearance, values keep delivery order.
    """
    grouped: dict[str, list[str]] = {}
    for name, value in items:
        grouped.setdefault(name, []).append(value)
    return {name: ",".join(values) for name, values in grouped.items()}


def flatten_headers(raw: Iterable[tuple[bytes, bytes]]) -> dict[str, str]:
    """Flatten raw ASGI header pairs under canonical header names."""
    return flatten(
        (canonical_header_key(name.decode("latin-1")), value.decode("latin-1"))
        for name, value in raw
    )


def mount_url(headers: dict[str, str], host: str, target: str) -> str:
    """Rebuild the absolute URL; the scheme comes from X-Forwarded-Proto when present."""
    scheme = headers.get(X_FORWARDED_PROTO, "http")
    return f"{scheme}://{host}{target}"


def resolve_origin(headers: dict[str, str], remote_addr: str) -> str:
    """Return the best-guess client address.

    Precedence: Cf-Connecting-Ip > X-Real-Ip > X-Forwarded-For (first hop)
    > transport remote address without its port.
    """
    if CF_CONNECTING_IP in headers:
        return headers[CF_CONNECTING_IP]
    if X_REAL_IP in headers:
        return headers[X_REAL_IP]
    if X_FORWARDED_FOR in headers:
        return headers[X_FORWARDED_FOR].split(",")[0]
    host, _ = split_host_port(remote_addr)
    return host


def _reject_constant(value: str) -> Any:
    raise NotJSON(value)


def sniff_json(data: str) -> Any:
    """Return the parsed JSON value of ``data``, or None when it is not a JSON document.

    Non-integer numbers are kept as Decimal so no precision or range is lost.
    """
    try:
        return json.loads(data, parse_constant=_reject_constant, parse_float=Decimal)
    except (NotJSON, ValueError, RecursionError):
        return None


def reflect(*, method: str, headers: dict[str, str], params: dict[str, str],
            host: str, target: str, remote_addr: str, data: str) -> EchoResponse:
    """Assemble the EchoResponse for one request."""
    return EchoResponse(
        data=data,
        headers=headers,
        json=sniff_json(data),
        method=method,
        origin=resolve_origin(headers, remote_addr),
        params=params,
        url=mount_url(headers, host, target),
    )
