"""Pretty logger wrapper."""
from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "gecho"

_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}
_RESET = "\033[0m"


class PrettyFormatter(logging.Formatter):
    """Prefix each record with its level, colored on terminals."""

    def __init__(self, color: bool = False) -> None:
        super().__init__("%(message)s")
        self._color = color

    def format(self, record: logging.LogRecord) -> str:
        level = "WARN" if record.levelno == logging.WARNING else record.levelname
        prefix = f"[{level}]"
        if self._color:
            prefix = f"{_COLORS.get(record.levelno, '')}{prefix}{_RESET}"
        return f"{prefix} {super().format(record)}"


def build_logger(level: str | int = "INFO", stream: TextIO | None = None,
                 name: str = LOGGER_NAME) -> logging.Logger:
    """Return a dedicated, non-propagating logger writing to ``stream``."""
    stream = stream if stream is not None else sys.stdout
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    isatty = getattr(stream, "isatty", None)
    handler.setFormatter(PrettyFormatter(color=bool(isatty and isatty())))
    logger.addHandler(handler)
    return logger
