"""Shared HTTP error helpers and exception handlers."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

BODY_READ_ERROR = "An error occurred while reading the request body"
INTERNAL_ERROR = "Internal Server Error"


class BodyReadError(Exception):
    """Raised when the request body cannot be read in full."""


def body_read_failed() -> PlainTextResponse:
    """Return the 500 reply for an unreadable request body."""
    return PlainTextResponse(BODY_READ_ERROR, status_code=500)


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    """Register process-wide exception handlers."""

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("unhandled exception: %s", exc)
        return PlainTextResponse(INTERNAL_ERROR, status_code=500)
