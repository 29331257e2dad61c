"""
config.py
Static configuration: validation thresholds, backend selection and logging.

Runtime overrides come from the environment (``DHPARAMS_*`` variables) and are
read once by :func:`load_settings`.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, TypedDict

# ————————————————————————————————————————————————————————————————
# Helpers & typing
# ————————————————————————————————————————————————————————————————

MODULE_DIR = Path(__file__).resolve().parent

BACKEND_CRYPTOGRAPHY = "cryptography"
BACKEND_DUMMY = "dummy"
BACKENDS = (BACKEND_CRYPTOGRAPHY, BACKEND_DUMMY)


class Settings(TypedDict):
    backend: str
    log_level: int
    log_file: str | None


# ————————————————————————————————————————————————————————————————
# Validation defaults
# ————————————————————————————————————————————————————————————————

MIN_MODULUS_BITS: int = 1_024
DEFAULT_ENCODING: str = "der"

# ————————————————————————————————————————————————————————————————
# Environment
# ————————————————————————————————————————————————————————————————

ENV_BACKEND = "DHPARAMS_BACKEND"
ENV_LOG_LEVEL = "DHPARAMS_LOG_LEVEL"
ENV_LOG_FILE = "DHPARAMS_LOG_FILE"


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {raw!r}")
    return level


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *env* (``os.environ`` by default)."""
    if env is None:
        env = os.environ

    backend = env.get(ENV_BACKEND, BACKEND_CRYPTOGRAPHY).strip().lower()
    if backend not in BACKENDS:
        raise ValueError(
            f"{ENV_BACKEND} must be one of {', '.join(BACKENDS)}; got {backend!r}"
        )

    return {
        "backend": backend,
        "log_level": _parse_level(env.get(ENV_LOG_LEVEL, "WARNING")),
        "log_file": env.get(ENV_LOG_FILE) or None,
    }


__all__ = [
    "Settings",
    "BACKENDS",
    "BACKEND_CRYPTOGRAPHY",
    "BACKEND_DUMMY",
    "MIN_MODULUS_BITS",
    "DEFAULT_ENCODING",
    "load_settings",
]
