# -*- coding: utf-8 -*-
"""
Shared helpers: logging setup and reading encoded material from byte sources.
"""
from __future__ import annotations

import logging
from typing import IO, Protocol

# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ---------------------------------------------------------------------------
_LOG_FORMAT = (
    "%(asctime)s [%(levelname).1s] %(name)s │ "
    "%(message)s (%(filename)s:%(lineno)d)"
)


def setup_logging(level: int = logging.WARNING,
                  log_file: str | None = None) -> None:
    """Configure logging once at program start."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        handlers=handlers,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Byte sources
# ---------------------------------------------------------------------------

class ByteSource(Protocol):
    def read(self) -> bytes: ...


def read_all(source: ByteSource | IO[bytes]) -> bytes:
    """Read everything *source* has left. Text streams are encoded as ASCII."""
    data = source.read()
    if isinstance(data, str):
        data = data.encode("ascii")
    return bytes(data)
