"""Host/port helpers for transport addresses and listen addresses."""
from __future__ import annotations


def split_host_port(addr: str) -> tuple[str, str]:
    """Split ``host:port`` into its parts, understanding ``[v6]:port``.

    A value without a port is returned as ``(addr, "")``. Brackets around an
    IPv6 literal are removed from the host part.
    """
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0:
            return addr, ""
        host, rest = addr[1:end], addr[end + 1:]
        if rest.startswith(":"):
            return host, rest[1:]
        return host, ""

    # bare IPv6 literal without port
    if addr.count(":") > 1:
        return addr, ""

    host, sep, port = addr.partition(":")
    return host, port if sep else ""


def join_host_port(host: str, port: int | str) -> str:
    """Render ``host:port``, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
